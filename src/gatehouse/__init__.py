"""Gatehouse - account signup, signin and bearer token issuance.

Layers:
    gatehouse/
    ├── domain/          # Account records and the repository contract
    ├── application/     # Account service (signup, signin)
    ├── infrastructure/  # Repository implementations
    ├── presentation/    # HTTP API and CLI
    └── container.py     # Composition root
"""

__version__ = "1.0.0"
