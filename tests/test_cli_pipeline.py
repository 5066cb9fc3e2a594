"""
CLI pipeline tests

Runs the replay stages on a temporary input directory:
source file → env_check → source_read → stream_replay → results_write
"""

import json

import pytest

from flowtype.__main__ import (
    env_check,
    parser,
    results_report,
    results_write,
    source_read,
    stream_replay,
)
from flowtype.models import ProgramState, pipeline


SOURCE = "Hello **world**!\n\nPick one: ?[%{{ color }} Red//r | Blue | ...other]\n"


@pytest.fixture
def state(tmp_path):
    inputdir = tmp_path / "in"
    inputdir.mkdir()
    (inputdir / "answer.md").write_text(SOURCE, encoding="utf-8")
    return ProgramState(
        inputdir=inputdir,
        outputdir=tmp_path / "out",
        verbosity=0,
        inputFile="answer.md",
        typingSpeed=0.0,
        chunkSize=4,
        quiet=True,
    )


class TestStages:
    """Stages one at a time"""

    def test_env_check(self, state):
        checked = env_check(state)

        assert checked.envOK is True
        assert checked.inputSourceFile == state.inputdir / "answer.md"
        assert checked.jsonOutputdir.is_dir()
        assert state.envOK is False

    def test_env_check_missing_file(self, state):
        state.inputFile = "missing.md"

        with pytest.raises(SystemExit) as excinfo:
            env_check(state)

        assert excinfo.value.code == 1

    def test_source_read(self, state):
        read = source_read(env_check(state))

        assert read.sourceText == SOURCE

    def test_source_read_highlight(self, state, capsys):
        state.highlight = True

        source_read(env_check(state))

        assert "color" in capsys.readouterr().out

    def test_stream_replay(self, state):
        replayed = stream_replay(source_read(env_check(state)))

        assert replayed.displayText == SOURCE
        assert replayed.replayEvents == len(range(0, len(SOURCE), 4))
        assert "".join(token.content for token in replayed.tokens) == SOURCE

    def test_stream_replay_disabled(self, state):
        state.disableTyping = True

        replayed = stream_replay(source_read(env_check(state)))

        assert replayed.displayText == SOURCE


class TestReport:
    """The JSON report"""

    def test_report_contents(self, state):
        final = pipeline(state, env_check, source_read, stream_replay, results_write, results_report)

        assert final.outputFile == state.outputdir / "answer.flow.json"
        report = json.loads(final.outputFile.read_text(encoding="utf-8"))

        assert report["displayText"] == SOURCE
        assert report["variables"] == ["color"]
        assert report["interactions"][0]["variant"] == "buttons-with-placeholder"
        assert report["interactions"][0]["properties"] == {
            "variableName": "color",
            "buttonTexts": ["Red", "Blue"],
            "buttonValues": ["r", "Blue"],
            "placeholder": "other",
        }
        assert "<strong>world</strong>" in report["html"]
        assert "<custom-variable" in report["html"]
        assert {"content": "**world**", "kind": "atomic", "subtype": "bold"} in report["tokens"]

    def test_output_subdir(self, state):
        state.outputSubdir = "reports"

        final = pipeline(state, env_check, source_read, stream_replay, results_write)

        assert final.outputFile.parent == state.outputdir / "reports"

    def test_report_requires_output(self, state):
        with pytest.raises(SystemExit):
            results_report(state)


class TestArguments:
    """argparse options map onto ProgramState"""

    def test_namespace(self, tmp_path):
        options = parser.parse_args(
            ["--inputFile", "a.md", "--typingSpeed", "0.01", "--disableTyping", "-vv"]
        )

        state = ProgramState.state_createFromNamespace(options, tmp_path, tmp_path)

        assert state.inputFile == "a.md"
        assert state.typingSpeed == 0.01
        assert state.disableTyping is True
        assert state.verbosity == 3
        assert state.chunkSize is None


class TestReportName:
    """Report file name follows the source file name"""

    def test_dotted_stem_kept(self, state):
        """answer.v2.md and answer.md write different reports"""
        (state.inputdir / "answer.v2.md").write_text("v2", encoding="utf-8")
        state.inputFile = "answer.v2.md"

        final = pipeline(state, env_check, source_read, stream_replay, results_write)

        assert final.outputFile == state.outputdir / "answer.v2.flow.json"
