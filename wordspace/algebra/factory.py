"""Factory for creating composition methods with registry pattern."""

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Type, Union

from wordspace.core.exceptions import UnsupportedMeasureError

if TYPE_CHECKING:
    from wordspace.algebra.methods import CompositionMethod

logger = logging.getLogger(__name__)

# Registry to hold composition method classes
_METHOD_REGISTRY: Dict[str, Type["CompositionMethod"]] = {}

# Config keys accepted for each parameter
_PARAM_ALIASES = {"lambda": "lambda_"}


def register_method(name: str) -> Callable:
    """
    Decorator to register a composition method class.

    Usage:
        @register_method("addition")
        class Addition(CompositionMethod):
            ...
    """
    def decorator(cls: Type["CompositionMethod"]) -> Type["CompositionMethod"]:
        if name in _METHOD_REGISTRY:
            logger.warning(f"Overwriting existing composition method: {name}")
        _METHOD_REGISTRY[name] = cls
        logger.debug(f"Registered composition method: {name} -> {cls.__name__}")
        return cls
    return decorator


def get_registered_methods() -> List[str]:
    """Return list of registered composition method names."""
    return list(_METHOD_REGISTRY.keys())


class CompositionMethodFactory:
    """
    Factory that creates composition methods by name or config.

    Usage:
        method = CompositionMethodFactory.create("dilation", lambda_=3.0)

        method = CompositionMethodFactory.from_config({
            "method": "combined",
            "alpha": 0.6, "beta": 0.4, "gamma": 0.0,
        })
    """

    @classmethod
    def create(cls, name: str, **params) -> "CompositionMethod":
        """
        Create a composition method.

        Args:
            name: Method name ('addition', 'multiplication', 'combined', 'dilation')
            **params: Method parameters; 'lambda' is accepted for 'lambda_'

        Returns:
            CompositionMethod instance

        Raises:
            UnsupportedMeasureError: If name is unknown
        """
        key = name.lower()
        if key not in _METHOD_REGISTRY:
            raise UnsupportedMeasureError(
                f"Unknown composition method: '{name}'. "
                f"Available: {get_registered_methods()}"
            )

        params = {_PARAM_ALIASES.get(k, k): v for k, v in params.items()}
        return _METHOD_REGISTRY[key](**params)

    @classmethod
    def from_config(cls, config: Union[dict, str, "CompositionMethod", None]) -> "CompositionMethod":
        """
        Create a method from the ``composition`` config section.

        Only the parameters the chosen method takes are used, so one
        section can carry alpha/beta/gamma and lambda side by side.
        """
        from wordspace.algebra.methods import CompositionMethod

        if isinstance(config, CompositionMethod):
            return config
        if config is None:
            config = {}
        if isinstance(config, str):
            config = {"method": config}

        name = config.get("method", "combined")
        method_class = _METHOD_REGISTRY.get(str(name).lower())
        accepted = getattr(method_class, "__dataclass_fields__", {})

        params = {}
        for k, v in config.items():
            field_name = _PARAM_ALIASES.get(k, k)
            if field_name in accepted:
                params[field_name] = v

        logger.debug(f"Creating composition method from config: {name} {params}")
        return cls.create(name, **params)
