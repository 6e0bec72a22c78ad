"""Cashbook - account balances and cash book tracking."""

__version__ = "0.1.0"


# Import main lazily so importing the domain layer doesn't pull in click
def __getattr__(name):
    if name == "main":
        from cashbook.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
