"""cocktail-finder: Suggest cocktails from flavor and strength preferences."""

from cocktail_finder.core import suggest_cocktails
from cocktail_finder.preferences import PreferenceModel
from cocktail_finder.prompt import compile_prompt
from cocktail_finder.recovery import recover_suggestions
from cocktail_finder.schema import Cocktail, FlavorProfile, Ingredient
from cocktail_finder.share import decode_share_token, encode_share_token

__version__ = "0.1.0"

__all__ = [
    "suggest_cocktails",
    "compile_prompt",
    "recover_suggestions",
    "encode_share_token",
    "decode_share_token",
    "Cocktail",
    "FlavorProfile",
    "Ingredient",
    "PreferenceModel",
    "__version__",
]
