pytest_plugins = ["logscope.testing.fixtures"]
