"""Track long-running VMware Cloud Foundation control-plane tasks."""

__version__ = "0.1.0"
