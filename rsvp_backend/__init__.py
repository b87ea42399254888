# rsvp_backend/__init__.py
"""Backend de RSVP: validación, almacenamiento en JSON y confirmación por WhatsApp."""

__version__ = "1.0.0"
