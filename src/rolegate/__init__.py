"""RoleGate - time-bounded, scope-qualified role based access control."""

__version__ = "0.1.0"
