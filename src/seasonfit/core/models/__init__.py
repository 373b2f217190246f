"""Double-sigmoid model package.

Importing this package registers every model in ``MODELS``.
"""

from seasonfit.core.models.base import DoubleSigmoid
from seasonfit.core.models.gaussian import Gaussian
from seasonfit.core.models.logistic import Logistic
from seasonfit.core.models.registry import (
    MODELS,
    Model,
    ModelName,
    get_model,
    list_models,
    register_model,
    resolve_model_name,
)
from seasonfit.core.models.sine import Sine
from seasonfit.core.models.tanh import HyperbolicTangent

__all__ = [
    "MODELS",
    "DoubleSigmoid",
    "Gaussian",
    "HyperbolicTangent",
    "Logistic",
    "Model",
    "ModelName",
    "Sine",
    "get_model",
    "list_models",
    "register_model",
    "resolve_model_name",
]
