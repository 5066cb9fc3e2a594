"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing CLI stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field
from functools import reduce
import dataclasses


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputSubdir,
          typingSpeed, chunkSize, disableTyping, highlight, quiet
        - env_check: inputSourceFile, jsonOutputdir, envOK
        - source_read: sourceText
        - stream_replay: displayText, tokens, replayEvents
        - results_write: interactions, outputFile
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the Markdown source
        outputdir: Base output directory
        verbosity: Logging verbosity level (0-3)
        inputFile: Markdown filename (relative to inputdir)
        outputSubdir: Subdirectory within outputdir for results
        typingSpeed: Seconds per reveal tick (None: use settings)
        chunkSize: Characters per simulated stream event (None: use settings)
        disableTyping: Show the content at once instead of revealing it
        highlight: Print the source through the Pygments lexer first
        quiet: Do not echo the reveal to stdout
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the Markdown source
        jsonOutputdir: Final output directory (outputdir + outputSubdir)
        sourceText: Normalized source text
        displayText: Display text once the reveal completed
        tokens: Reveal tokens of the finalized session
        replayEvents: Number of content updates delivered
        interactions: Interactive controls found in the source
        outputFile: Path of the written JSON report
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputSubdir: str = field(default=".")
    typingSpeed: Optional[float] = field(default=None)
    chunkSize: Optional[int] = field(default=None)
    disableTyping: bool = field(default=False)
    highlight: bool = field(default=False)
    quiet: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    jsonOutputdir: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    displayText: str = field(default="")
    tokens: Optional[List[Any]] = field(default=None)  # List[RevealToken] at runtime
    replayEvents: int = field(default=0)
    interactions: Optional[List[Dict[str, Any]]] = field(default=None)
    outputFile: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are ignored.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source files
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            stream_replay,
            results_write,
            results_report
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
