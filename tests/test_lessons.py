"""
Lesson loading and scripted lesson playback tests.
"""

import shutil
import textwrap

import pytest

from bashtutor.classroom import ScriptedLesson, SectionCatalog, run_command
from bashtutor.schemas import LessonContent, SectionStatus
from bashtutor.utils import (
    LESSONS_DIR,
    LessonLoadError,
    get_available_lessons,
    load_all_lessons,
    load_lesson,
)

from conftest import output_of

needs_bash = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")


def write_lesson(directory, name, body):
    path = directory / f"{name}.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def lesson(steps, title="DEMO"):
    return LessonContent.model_validate({
        "lesson_id": "demo",
        "title": title,
        "position": 1,
        "steps": steps,
    })


class TestLessonLoader:
    """Test loading YAML lesson files."""

    def test_load_lesson(self, tmp_path):
        write_lesson(tmp_path, "loops", """
            lesson_id: loops
            title: LOOPS
            position: 3
            steps:
              - type: explain
                text: Loops repeat things.
        """)
        content = load_lesson("loops", tmp_path)
        assert content.title == "LOOPS"
        assert content.steps[0].text == "Loops repeat things."

    def test_missing_file(self, tmp_path):
        with pytest.raises(LessonLoadError):
            load_lesson("nope", tmp_path)

    def test_invalid_yaml(self, tmp_path):
        write_lesson(tmp_path, "broken", "title: [unclosed\n")
        with pytest.raises(LessonLoadError):
            load_lesson("broken", tmp_path)

    def test_not_a_mapping(self, tmp_path):
        write_lesson(tmp_path, "listy", "- a\n- b\n")
        with pytest.raises(LessonLoadError):
            load_lesson("listy", tmp_path)

    def test_schema_violation(self, tmp_path):
        write_lesson(tmp_path, "bad", """
            lesson_id: bad
            title: BAD
            position: 1
            steps: []
        """)
        with pytest.raises(LessonLoadError):
            load_lesson("bad", tmp_path)

    def test_ordering_by_position(self, tmp_path):
        for name, position in [("a_last", 30), ("b_first", 10), ("c_middle", 20)]:
            write_lesson(tmp_path, name, f"""
                lesson_id: {name}
                title: {name.upper()}
                position: {position}
                steps:
                  - type: checkpoint
            """)
        assert get_available_lessons(tmp_path) == ["a_last", "b_first", "c_middle"]
        assert [l.lesson_id for l in load_all_lessons(tmp_path)] == ["b_first", "c_middle", "a_last"]

    def test_duplicate_lesson_ids(self, tmp_path):
        for name in ("one", "two"):
            write_lesson(tmp_path, name, """
                lesson_id: same
                title: SAME
                position: 1
                steps:
                  - type: checkpoint
            """)
        with pytest.raises(LessonLoadError):
            load_all_lessons(tmp_path)

    def test_missing_directory_has_no_lessons(self, tmp_path):
        assert get_available_lessons(tmp_path / "absent") == []


class TestBundledLessons:
    """The lessons shipped with the package must load."""

    def test_all_bundled_lessons_valid(self):
        lessons = load_all_lessons()
        assert len(lessons) == len(get_available_lessons(LESSONS_DIR))
        assert lessons[-1].lesson_id == "summary"

    def test_bundled_catalog(self):
        catalog = SectionCatalog.from_directory()
        assert len(catalog) >= 5
        assert catalog.get(1).title == "BASIC LINUX + SYSTEM INFORMATION COMMANDS"
        assert len(set(catalog.titles)) == len(catalog)

    def test_bundled_table_of_contents_order(self):
        titles = SectionCatalog.from_directory().titles
        assert len(titles) == 20
        assert titles[1] == "FILE SEARCH & REPLACE"
        assert titles[9] == "FUNCTIONS & ARRAYS"
        assert titles[13] == "ERROR HANDLING & TRAP"
        assert titles[-1] == "SUMMARY"


class TestScriptedLesson:
    """Test playing back lesson steps inside a runner."""

    def _runner(self, make_runner, content, inputs=()):
        return make_runner([(content.title, ScriptedLesson(content))], inputs=inputs)

    def test_text_steps_rendered(self, make_runner):
        content = lesson([
            {"type": "heading", "text": "1️⃣ Intro"},
            {"type": "explain", "text": "Some explanation."},
            {"type": "example", "code": "echo hi\necho bye"},
        ])
        runner = self._runner(make_runner, content)
        result = runner.run_section(runner.catalog.get(1))
        out = output_of(runner)
        assert result.status == SectionStatus.COMPLETED
        assert "1️⃣ Intro" in out
        assert "Some explanation." in out
        assert "    echo hi" in out

    def test_checkpoint_skip_stops_playback(self, make_runner):
        content = lesson([
            {"type": "explain", "text": "first"},
            {"type": "checkpoint"},
            {"type": "explain", "text": "second"},
        ])
        runner = self._runner(make_runner, content, inputs=["q"])
        result = runner.run_section(runner.catalog.get(1))
        assert result.status == SectionStatus.SKIPPED
        assert "second" not in output_of(runner)

    def test_write_file_registers_before_creating(self, make_runner, tmp_path):
        content = lesson([{"type": "write_file", "path": "notes/demo.txt", "content": "hello\n"}])
        runner = self._runner(make_runner, content)
        runner.run_section(runner.catalog.get(1))

        created = tmp_path / "notes" / "demo.txt"
        assert created.read_text() == "hello\n"
        assert created.absolute() in runner.registry.paths
        runner.cleanup()
        assert not created.exists()

    @needs_bash
    def test_run_step_output_and_success(self, make_runner):
        content = lesson([{"type": "run", "command": "echo hello", "prompt": None}])
        runner = self._runner(make_runner, content)
        result = runner.run_section(runner.catalog.get(1))
        assert result.status == SectionStatus.COMPLETED
        assert "Output: hello" in output_of(runner)

    @needs_bash
    def test_run_step_prompt_is_a_checkpoint(self, make_runner):
        content = lesson([{"type": "run", "command": "echo never"}])
        runner = self._runner(make_runner, content, inputs=["Q"])
        result = runner.run_section(runner.catalog.get(1))
        assert result.status == SectionStatus.QUIT
        assert "Output: never" not in output_of(runner)

    @needs_bash
    def test_failing_run_step_fails_section(self, make_runner):
        content = lesson([
            {"type": "run", "command": "exit 4", "prompt": None},
            {"type": "explain", "text": "still shown"},
        ])
        runner = self._runner(make_runner, content)
        result = runner.run_section(runner.catalog.get(1))
        assert result.status == SectionStatus.FAILED
        assert result.exit_code == 4
        assert "still shown" in output_of(runner)

    @needs_bash
    def test_allow_failure(self, make_runner):
        content = lesson([{"type": "run", "command": "exit 4", "prompt": None, "allow_failure": True}])
        runner = self._runner(make_runner, content)
        result = runner.run_section(runner.catalog.get(1))
        assert result.status == SectionStatus.COMPLETED
        assert "Command exited with status 4" in output_of(runner)

    @needs_bash
    def test_creates_are_cleaned(self, make_runner, tmp_path):
        content = lesson([{
            "type": "run",
            "command": "mkdir -p demo_dir && touch demo_dir/a.txt",
            "prompt": None,
            "creates": ["demo_dir"],
        }])
        runner = self._runner(make_runner, content)
        runner.run_section(runner.catalog.get(1))
        assert (tmp_path / "demo_dir" / "a.txt").exists()
        runner.cleanup()
        assert not (tmp_path / "demo_dir").exists()

    @needs_bash
    def test_creates_patterns_are_cleaned(self, make_runner, tmp_path):
        (tmp_path / "keep.txt").write_text("mine")
        content = lesson([{
            "type": "run",
            "command": "touch sorted1.txt sorted2.txt",
            "prompt": None,
            "creates": ["sorted*.txt"],
        }])
        runner = self._runner(make_runner, content)
        runner.run_section(runner.catalog.get(1))
        assert (tmp_path / "sorted2.txt").exists()
        runner.cleanup()
        assert [p.name for p in tmp_path.iterdir()] == ["keep.txt"]

    @needs_bash
    def test_ask_exports_variable(self, make_runner):
        content = lesson([
            {"type": "ask", "prompt": "Color? ", "variable": "COLOR"},
            {"type": "run", "command": 'echo "color is $COLOR"', "prompt": None},
        ])
        runner = self._runner(make_runner, content, inputs=["blue"])
        runner.run_section(runner.catalog.get(1))
        assert "Output: color is blue" in output_of(runner)

    @needs_bash
    def test_script_args_and_temp_file(self, make_runner, tmp_path):
        content = lesson([{
            "type": "run",
            "command": 'echo "args: $*"; echo x > "$TUTOR_TMP"',
            "prompt": None,
        }])
        runner = make_runner([("DEMO", ScriptedLesson(content))], script_args=["one", "two"])
        runner.run_section(runner.catalog.get(1))
        assert "Output: args: one two" in output_of(runner)
        assert runner.temp_file.exists()
        runner.cleanup()
        assert not runner.temp_file.exists()


class TestRunCommand:
    """Test the bash wrapper directly."""

    @needs_bash
    def test_exit_code_and_combined_output(self, tmp_path):
        code, output = run_command("echo out; echo err >&2; exit 3", tmp_path)
        assert code == 3
        assert "out" in output
        assert "err" in output

    def test_missing_bash(self, tmp_path, monkeypatch):
        monkeypatch.setattr("shutil.which", lambda name: None)
        code, output = run_command("echo hi", tmp_path)
        assert code == 127
        assert output == ""
