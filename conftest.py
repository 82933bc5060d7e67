pytest_plugins = ["strata.test_utils.fixtures"]
