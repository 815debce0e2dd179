"""Factory for creating word-space stores with registry pattern."""

import logging
from typing import Callable, Dict, List, Type

from wordspace.store.base import BaseWordSpaceStore

logger = logging.getLogger(__name__)

# Registry to hold store classes
_STORE_REGISTRY: Dict[str, Type[BaseWordSpaceStore]] = {}


def register_store(name: str) -> Callable:
    """
    Decorator to register a store class.

    Usage:
        @register_store("jsonl")
        class JsonlWordSpaceStore(BaseWordSpaceStore):
            ...
    """
    def decorator(cls: Type[BaseWordSpaceStore]) -> Type[BaseWordSpaceStore]:
        if name in _STORE_REGISTRY:
            logger.warning(f"Overwriting existing store: {name}")
        _STORE_REGISTRY[name] = cls
        logger.debug(f"Registered store: {name} -> {cls.__name__}")
        return cls
    return decorator


def get_registered_stores() -> List[str]:
    """Return list of registered store names."""
    return list(_STORE_REGISTRY.keys())


class WordSpaceStoreFactory:
    """
    Factory that creates stores based on config.

    Usage:
        # From config dict
        store = WordSpaceStoreFactory.from_config({
            "provider": "jsonl",
            "path": "data/wordspace",
            "load_into_memory": True,
        })

        # Or directly
        store = WordSpaceStoreFactory.create("jsonl", path="data/wordspace")
    """

    @classmethod
    def create(cls, provider: str, **kwargs) -> BaseWordSpaceStore:
        """
        Create a store instance.

        Args:
            provider: Provider name ('jsonl', 'memory')
            **kwargs: Provider-specific configuration

        Returns:
            Store instance

        Raises:
            ValueError: If provider is unknown
        """
        if provider not in _STORE_REGISTRY:
            available = get_registered_stores()
            raise ValueError(
                f"Unknown store provider: '{provider}'. "
                f"Available: {available}"
            )

        store_class = _STORE_REGISTRY[provider]
        logger.info(f"Creating word-space store: {provider}")

        return store_class(**kwargs)

    @classmethod
    def from_config(cls, config: dict) -> BaseWordSpaceStore:
        """
        Create store from the ``store`` config section.

        Args:
            config: Dict with provider and provider-specific settings

        Returns:
            Store instance
        """
        settings = dict(config)
        provider = settings.pop("provider", "jsonl")

        logger.debug(f"Creating store from config: provider={provider}")

        return cls.create(provider, **settings)


def open_store(
    path: str,
    load_into_memory: bool = False,
    provider: str = "jsonl",
) -> BaseWordSpaceStore:
    """
    Open a word space stored on disk.

    Raises:
        ValueError: If provider is unknown or does not open a path
        StoreUnavailableError: If path is not a valid word space
    """
    store_class = _STORE_REGISTRY.get(provider)
    if store_class is not None and not store_class.opens_path:
        raise ValueError(
            f"Store provider '{provider}' does not open a path. "
            f"Path providers: {[n for n, c in _STORE_REGISTRY.items() if c.opens_path]}"
        )
    return WordSpaceStoreFactory.create(
        provider, path=path, load_into_memory=load_into_memory
    )
