"""nounspec: noun descriptors for SaaS domains and a validating registry."""

__version__ = "0.1.0"
