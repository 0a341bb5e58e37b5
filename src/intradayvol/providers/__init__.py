"""Bar data provider registry."""

from __future__ import annotations

import importlib

from intradayvol.config import ProviderType
from intradayvol.providers.base import BaseBarProvider

# Classes are imported on demand so the REST stack is only loaded when used.
PROVIDER_CLASSES: dict[ProviderType, str] = {
    ProviderType.POLYGON: "intradayvol.providers.polygon.PolygonProvider",
    ProviderType.MOCK: "intradayvol.providers.mock.MockProvider",
}


def create_provider(provider_type: ProviderType, **kwargs) -> BaseBarProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    module_path, cls_name = PROVIDER_CLASSES[provider_type].rsplit(".", 1)
    cls = getattr(importlib.import_module(module_path), cls_name)
    return cls(**kwargs)


__all__ = ["BaseBarProvider", "PROVIDER_CLASSES", "create_provider"]
