pytest_plugins = ("pathcopy.testing",)
