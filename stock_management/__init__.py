"""Stock Management: multi-tenant role and permission authorization core."""

__version__ = "1.0.0"
