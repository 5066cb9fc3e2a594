"""
Interactive-control data models

Structures produced by the interactive-syntax parser and consumed by the
tree transform and by whatever renders the resulting controls.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class SyntaxVariant(Enum):
    """
    Grammars of the ?[...] interactive tag

    The first four are declared in match-priority order.
    """
    BUTTONS_WITH_PLACEHOLDER = "buttons-with-placeholder"  # ?[%{{v}} a | b | ... hint]
    PLACEHOLDER_ONLY = "placeholder-only"                  # ?[%{{v}} ... hint]
    BUTTONS_ONLY = "buttons-only"                          # ?[%{{v}} a | b]
    SINGLE_BUTTON = "single-button"                        # ?[%{{v}} a]
    BARE_BUTTON = "bare-button"                            # ?[a]


@dataclass
class ParsedInteraction:
    """
    Structured descriptor of one interactive control

    Attributes:
        variable_name: Variable the control sets (empty for bare buttons)
        button_texts: Button labels, trimmed, empty labels dropped
        button_values: Values sent for each button, parallel to button_texts.
                       None unless some label carried an explicit //value.
        placeholder: Hint text of the free-text input, None when the
                     control has no input field

    Example:
        For "?[%{{ color }} Red//r | Blue | ...other colour]":
        ParsedInteraction(
            variable_name="color",
            button_texts=["Red", "Blue"],
            button_values=["r", "Blue"],
            placeholder="other colour"
        )
    """
    variable_name: str
    button_texts: List[str] = field(default_factory=list)
    button_values: Optional[List[str]] = None
    placeholder: Optional[str] = None

    def buttonValue_get(self, index: int) -> str:
        """Value sent for button ``index``, defaulting to its label"""
        if self.button_values is not None:
            return self.button_values[index]
        return self.button_texts[index]

    def properties_get(self) -> Dict[str, Any]:
        """
        Node payload in the shape renderers expect

        Returns:
            Dict with variableName and buttonTexts, plus buttonValues and
            placeholder when present
        """
        properties: Dict[str, Any] = {
            "variableName": self.variable_name,
            "buttonTexts": list(self.button_texts),
        }
        if self.button_values is not None:
            properties["buttonValues"] = list(self.button_values)
        if self.placeholder is not None:
            properties["placeholder"] = self.placeholder
        return properties


@dataclass
class InteractionMatch:
    """
    One resolved ?[...] tag inside a text

    Attributes:
        variant: Grammar that matched
        start: Offset of the leading '?' in the searched text
        end: Offset just past the closing ']'
        raw: The matched source text (text[start:end])
        interaction: Parsed descriptor
    """
    variant: SyntaxVariant
    start: int
    end: int
    raw: str
    interaction: ParsedInteraction


@dataclass
class SendContent:
    """
    Payload handed back when the user acts on a control

    Exactly one of button_text and input_text is set.
    """
    variable_name: str
    button_text: Optional[str] = None
    input_text: Optional[str] = None
