"""
Markdown flow: a conversation as a list of revealed content blocks

Each block owns a Typewriter. Blocks marked finished (history restored from
a previous session) show at once and are read-only; the live block reveals
as it streams. Controls inside a block send SendContent payloads back
through on_send.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..models.interaction import InteractionMatch, ParsedInteraction, SendContent
from .log import LOG
from .syntax import interactions_findAll
from .typewriter import Typewriter


SendCallback = Callable[[SendContent], None]
BlockCompleteCallback = Callable[[int], None]


@dataclass
class FlowBlock:
    """
    One content block of a flow

    Attributes:
        content: Markdown of the block
        is_finished: Block belongs to history: no typing, no sending
        default_button_text: Label of the button chosen earlier, if any
        default_input_text: Text entered earlier, if any
        readonly: Controls are shown but cannot send
    """
    content: str
    is_finished: bool = False
    default_button_text: Optional[str] = None
    default_input_text: Optional[str] = None
    readonly: bool = False


def interaction_send(
    interaction: ParsedInteraction,
    button_index: Optional[int] = None,
    input_text: Optional[str] = None,
) -> SendContent:
    """
    Build the payload for a button press or a submitted input

    Args:
        interaction: Control acted upon
        button_index: Index of the pressed button
        input_text: Text submitted through the placeholder input

    Returns:
        SendContent carrying the button's value or the input text

    Raises:
        ValueError: If not exactly one of button_index and input_text is
                    given, or the control has no such button or no input
    """
    if (button_index is None) == (input_text is None):
        raise ValueError("Exactly one of button_index and input_text must be given")

    if button_index is not None:
        if not 0 <= button_index < len(interaction.button_texts):
            raise ValueError(
                f"Control '{interaction.variable_name}' has no button {button_index}"
            )
        return SendContent(
            variable_name=interaction.variable_name,
            button_text=interaction.buttonValue_get(button_index),
        )

    if interaction.placeholder is None:
        raise ValueError(f"Control '{interaction.variable_name}' has no text input")
    return SendContent(variable_name=interaction.variable_name, input_text=input_text)


class MarkdownFlow:
    """
    Ordered collection of typewriter-revealed blocks

    Example:
        flow = MarkdownFlow(on_block_complete=print)
        flow.block_append(FlowBlock("Earlier answer", is_finished=True))
        index = flow.block_append(FlowBlock(""))
        flow.block_update(index, "Streaming **now**")
    """

    def __init__(
        self,
        blocks: Optional[List[FlowBlock]] = None,
        typing_speed: Optional[float] = None,
        disable_typing: bool = False,
        on_send: Optional[SendCallback] = None,
        on_block_complete: Optional[BlockCompleteCallback] = None,
        loop: Optional[Any] = None,
    ) -> None:
        self.typing_speed = typing_speed
        self.disable_typing = disable_typing
        self.on_send = on_send
        self.on_block_complete = on_block_complete
        self.loop = loop
        self.blocks: List[FlowBlock] = []
        self.typewriters: List[Typewriter] = []
        for block in blocks or []:
            self.block_append(block)

    def block_append(self, block: FlowBlock) -> int:
        """
        Add a block; finished blocks are displayed in full immediately

        Returns:
            Index of the new block
        """
        index = len(self.blocks)
        typewriter = Typewriter(
            typing_speed=self.typing_speed,
            disabled=block.is_finished or self.disable_typing,
            on_complete=lambda: self.blockComplete_notify(index),
            loop=self.loop,
        )
        self.blocks.append(block)
        self.typewriters.append(typewriter)
        if block.content or block.is_finished:
            typewriter.content_update(block.content, streaming=not block.is_finished)
        return index

    def block_update(self, index: int, content: str, streaming: bool = True) -> None:
        """Deliver the full current text of block index"""
        self.blocks[index].content = content
        self.typewriters[index].content_update(content, streaming=streaming)

    def block_finish(self, index: int) -> None:
        """The stream feeding block index ended"""
        self.typewriters[index].finish()

    def display_get(self, index: int) -> str:
        return self.typewriters[index].display_text

    def interactions_get(self, index: int) -> List[InteractionMatch]:
        """Controls visible in the current display text of block index"""
        return interactions_findAll(self.typewriters[index].display_text)

    def send(
        self,
        index: int,
        interaction: ParsedInteraction,
        button_index: Optional[int] = None,
        input_text: Optional[str] = None,
    ) -> Optional[SendContent]:
        """
        Act on a control of block index

        Returns:
            The payload passed to on_send, or None when the block is
            finished or read-only and nothing was sent
        """
        block = self.blocks[index]
        if block.is_finished or block.readonly:
            LOG(f"Ignoring send on read-only block {index}", level=2)
            return None
        content = interaction_send(interaction, button_index=button_index, input_text=input_text)
        if self.on_send is not None:
            self.on_send(content)
        return content

    def blockComplete_notify(self, index: int) -> None:
        LOG(f"Block {index} typing finished", level=2)
        if self.on_block_complete is not None:
            self.on_block_complete(index)

    def close(self) -> None:
        for typewriter in self.typewriters:
            typewriter.close()
