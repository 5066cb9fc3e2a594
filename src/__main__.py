#!/usr/bin/env python3
"""
flowtype - Streaming typewriter reveal for conversational Markdown

Replays a Markdown file as if it were arriving from a live chat stream,
revealing it through the typewriter exactly as a chat front end would, and
writes a JSON report of the reveal tokens, the interactive controls and
the rendered HTML.

The CLI is a ChRIS plugin app (chris_plugin) taking an input and an output
directory.

Usage:
    flowtype inputdir/ outputdir/ --inputFile answer.md

    The report is written to outputdir/<name>.flow.json.

Examples:
    # Replay with the default typing speed
    flowtype . out/ --inputFile answer.md

    # Faster, bigger stream chunks, coloured source first
    flowtype . out/ --inputFile answer.md --typingSpeed 0.005 --chunkSize 8 --highlight

    # No animation, only the report
    flowtype . out/ --inputFile answer.md --disableTyping --quiet
"""

import asyncio
import json
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from pygments import highlight
from pygments.formatters import TerminalFormatter

from .config import appsettings
from .lib import (
    Typewriter,
    __version__,
    LOG,
    state_connectToLogger,
    html_render,
    interactions_findAll,
    markdown_normalize,
    variables_list,
)
from .lib.lexer import get_lexer
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
   __ _               _
  / _| | _____      _| |_ _   _ _ __   ___
 | |_| |/ _ \ \ /\ / / __| | | | '_ \ / _ \
 |  _| | (_) \ V  V /| |_| |_| | |_) |  __/
 |_| |_|\___/ \_/\_/  \__|\__, | .__/ \___|
                          |___/|_|
  Streaming typewriter for conversational Markdown
"""

# Define CLI arguments
parser = ArgumentParser(
    description="flowtype - replay Markdown through the streaming typewriter",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input Markdown file (relative to inputdir)"
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the JSON report",
)

parser.add_argument(
    "--typingSpeed",
    default=None,
    type=float,
    help="Seconds per reveal tick (default: FLOWTYPE_TYPING_SPEED or 0.03)",
)

parser.add_argument(
    "--chunkSize",
    default=None,
    type=int,
    help="Characters per simulated stream event (default: FLOWTYPE_STREAM_CHUNK_SIZE or 3)",
)

parser.add_argument(
    "--disableTyping",
    action="store_true",
    help="Show the content at once instead of revealing it",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    help="Print the source with syntax highlighting before the replay",
)

parser.add_argument(
    "--quiet",
    action="store_true",
    help="Do not echo the reveal to stdout",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the Markdown input
            - jsonOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)
    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.jsonOutputdir = state.outputdir / state.outputSubdir
    state.jsonOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.jsonOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the Markdown source and normalize it.

    Returns:
        ProgramState with added field:
            - sourceText: Normalized Markdown

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        source = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(source)} characters from {state.inputSourceFile.name}", level=2)

    if appsettings.normalize_input:
        source = markdown_normalize(source)
    state.sourceText = source

    if state.highlight:
        sys.stdout.write(highlight(source, get_lexer(), TerminalFormatter()))
        sys.stdout.write("\n")

    return state


async def replay_run(state: ProgramState) -> Typewriter:
    """
    Feed the source to a typewriter in growing prefixes and wait for the
    reveal to complete
    """
    echoed = 0

    def display_echo(display_text: str, is_complete: bool) -> None:
        nonlocal echoed
        if not state.quiet and len(display_text) > echoed:
            sys.stdout.write(display_text[echoed:])
            sys.stdout.flush()
        echoed = len(display_text)

    typewriter = Typewriter(
        typing_speed=state.typingSpeed,
        disabled=state.disableTyping,
        on_update=display_echo,
    )

    settings = appsettings
    if state.chunkSize is not None:
        settings = appsettings.model_copy(update={"stream_chunk_size": state.chunkSize})

    chunks = settings.chunks_make(state.sourceText)
    for prefix in chunks:
        typewriter.content_update(prefix)
        await asyncio.sleep(settings.stream_interval)
    typewriter.finish()
    await typewriter.wait_complete()
    typewriter.close()

    if not state.quiet:
        sys.stdout.write("\n")
    state.replayEvents = len(chunks)
    return typewriter


def stream_replay(inputstate: ProgramState) -> ProgramState:
    """
    Replay the source through the typewriter as a simulated stream.

    Returns:
        ProgramState with added fields:
            - displayText: Final display text
            - tokens: Reveal tokens of the session
            - replayEvents: Number of content updates delivered
    """
    state = inputstate.copy()

    LOG("Replaying source as a stream...", level=1)
    typewriter = asyncio.run(replay_run(state))

    state.displayText = typewriter.display_text
    state.tokens = typewriter.segments_get()
    LOG(
        f"Revealed {len(state.tokens)} tokens over {state.replayEvents} stream events",
        level=2,
    )
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the JSON report.

    Returns:
        ProgramState with added fields:
            - interactions: Controls found in the display text
            - outputFile: Path of the written report

    Exits:
        1 if the report cannot be written
    """
    state = inputstate.copy()

    matches = interactions_findAll(state.displayText)
    state.interactions = [
        {
            "variant": match.variant.value,
            "start": match.start,
            "end": match.end,
            "raw": match.raw,
            "properties": match.interaction.properties_get(),
        }
        for match in matches
    ]

    report = {
        "source": str(state.inputSourceFile),
        "displayText": state.displayText,
        "tokens": [
            {
                "content": token.content,
                "kind": token.kind.value,
                "subtype": token.subtype.value if token.subtype else None,
            }
            for token in state.tokens or []
        ],
        "interactions": state.interactions,
        "variables": variables_list(state.displayText),
        "html": html_render(state.displayText),
        "settings": {
            "typingSpeed": state.typingSpeed,
            "chunkSize": state.chunkSize,
            "disableTyping": state.disableTyping,
        },
    }

    state.outputFile = state.jsonOutputdir / f"{state.inputSourceFile.stem}.flow.json"
    try:
        state.outputFile.write_text(
            json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError as e:
        print(f"Error writing report: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {state.outputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the replay.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if no report was written
    """
    state: ProgramState = inputstate.copy()
    if not state.outputFile:
        print("Error: Replay failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Replay complete!", level=1)
    LOG(f"  Report: {state.outputFile}", level=1)
    LOG(f"  Tokens: {len(state.tokens or [])}", level=1)
    LOG(f"  Controls: {len(state.interactions or [])}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="flowtype - Streaming typewriter for conversational Markdown",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - replay a Markdown file through the typewriter.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. source_read: Read and normalize the Markdown
        3. stream_replay: Reveal it as a simulated stream
        4. results_write: Write the JSON report
        5. results_report: Summarize

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )
    if appsettings.debug_mode:
        state.verbosity = max(state.verbosity, 3)

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, stream_replay, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
