from .customization_controller import ApplyResult, ChangeRequest, CustomizationController
from .exclusive_group import ExclusiveGroup
from .option_binding import BoolFlag, EnumChoice, Option, OptionBinding, StoredValue, SwitchBinding, TextBinding
from .theme_selector import ThemeSelector, theme_slots

__all__ = [
    "ApplyResult",
    "BoolFlag",
    "ChangeRequest",
    "CustomizationController",
    "EnumChoice",
    "ExclusiveGroup",
    "Option",
    "OptionBinding",
    "StoredValue",
    "SwitchBinding",
    "TextBinding",
    "ThemeSelector",
    "theme_slots",
]
