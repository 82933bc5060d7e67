import re
from dataclasses import dataclass
from typing import Optional, Union

_LANGUAGE = re.compile(r"^[a-z]{2,3}$")
_REGION = re.compile(r"^(?:[A-Z]{2}|[0-9]{3})$")
_SCRIPT = re.compile(r"^[A-Z][a-z]{3}$")
_SUBTAG = re.compile(r"^[A-Za-z0-9]+$")
_SEPARATORS = re.compile(r"[-_]")

ROOT = "root"
UNDETERMINED = "und"


@dataclass(frozen=True)
class Locale:
    """
    A locale decomposed into its standard subtags.

    Subtags are classified by shape, the same way BCP-47 tags are written:
    lowercase language, Titlecase script, UPPERCASE or numeric region,
    anything else alphanumeric is the variant. A subtag that fits none of
    these marks the whole locale as malformed, which leaves it with no
    subtags at all.
    """

    language: Optional[str] = None
    script: Optional[str] = None
    region: Optional[str] = None
    variant: Optional[str] = None
    malformed: bool = False

    @classmethod
    def parse(cls, spec: Union[str, "Locale", None]) -> "Locale":
        if isinstance(spec, Locale):
            return spec
        if not isinstance(spec, str):
            return cls(malformed=spec is not None)

        spec = spec.strip()
        if not spec or spec == ROOT:
            return cls()

        language = script = region = variant = None
        for part in _SEPARATORS.split(spec):
            if not _SUBTAG.match(part):
                return cls(malformed=True)
            if _LANGUAGE.match(part):
                language = part
            elif _REGION.match(part):
                region = part
            elif _SCRIPT.match(part):
                script = part
            else:
                variant = part

        return cls(language=language, script=script, region=region, variant=variant)

    @property
    def spec(self) -> str:
        """The normalized string form; "root" when there are no subtags."""
        language = self.language
        if not language and (self.script or self.region or self.variant):
            language = UNDETERMINED
        parts = [language, self.script, self.region, self.variant]
        return "-".join(part for part in parts if part) or ROOT

    def is_root(self) -> bool:
        return self.spec == ROOT

    def is_malformed(self) -> bool:
        return self.malformed

    def has_language(self) -> bool:
        """True when a concrete language is present ("und" does not count)."""
        return bool(self.language) and self.language != UNDETERMINED

    def __str__(self) -> str:
        return self.spec
