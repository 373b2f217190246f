"""Model registry for dynamic double-sigmoid model registration."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from seasonfit.core.shared.exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from seasonfit.core.shared.typing import FloatArray


class ModelName(str, Enum):
    """Identifiers of the available double-sigmoid models."""

    GAUSSIAN = "gaussian"
    TANH = "tanh"
    LOGISTIC = "logistic"
    SINE = "sine"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class Model(Protocol):
    """Protocol for double-sigmoid models."""

    name: ModelName

    def evaluate(
        self, x: FloatArray, params: FloatArray
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        """Return ``(value, component1, component2)`` at abscissas ``x``."""
        ...

    def jacobian(self, x: FloatArray, params: FloatArray) -> FloatArray:
        """Return the ``(n, 7)`` matrix of partial derivatives of the value."""
        ...


# Global model registry
MODELS: dict[ModelName, Model] = {}


def register_model(name: ModelName) -> Callable[[type], type]:
    """Register a model class under an enumerated identifier.

    The class is instantiated once; models are stateless.

    Example:
        @register_model(ModelName.LOGISTIC)
        class Logistic(DoubleSigmoid):
            ...
    """

    def decorator(model_class: type) -> type:
        instance = model_class()
        instance.name = name
        MODELS[name] = instance
        return model_class

    return decorator


def resolve_model_name(name: ModelName | str) -> ModelName:
    """Convert a string or enum member to a ``ModelName``.

    Raises
    ------
        InputValidationError: If the identifier is not a known model.
    """
    if isinstance(name, ModelName):
        return name
    try:
        return ModelName(str(name).lower())
    except ValueError as exc:
        available = ", ".join(m.value for m in ModelName)
        msg = f"Unknown model '{name}'. Available: {available}"
        raise InputValidationError(msg) from exc


def get_model(name: ModelName | str) -> Model:
    """Get a registered model by identifier.

    Raises
    ------
        InputValidationError: If the identifier is unknown or unregistered.
    """
    key = resolve_model_name(name)
    try:
        return MODELS[key]
    except KeyError as exc:
        available = ", ".join(list_models())
        msg = f"Model '{key}' is not registered. Available: {available}"
        raise InputValidationError(msg) from exc


def list_models() -> list[str]:
    """List all registered model identifiers."""
    return [name.value for name in MODELS]


__all__ = [
    "MODELS",
    "Model",
    "ModelName",
    "get_model",
    "list_models",
    "register_model",
    "resolve_model_name",
]
