from readme_activity import END_MARKER, START_MARKER, SectionState, reconcile
from readme_activity.formatter import Formatter
from readme_activity.reconciler import find_marker
from readme_activity.utils import read_lines, write_lines

PLAIN = Formatter(html=False)


def test_missing_start_marker():
    lines = ["# Hello", END_MARKER]
    result = reconcile(lines, ["a"], PLAIN)
    assert result.state is SectionState.NO_START
    assert result.lines == lines
    assert not result.changed


def test_first_run_inserts_list_and_end_marker():
    lines = ["# Hello", START_MARKER, "footer"]
    result = reconcile(lines, ["a", "b", "c"], PLAIN)
    assert result.state is SectionState.START_NO_END
    assert result.lines == ["# Hello", START_MARKER, "1. a", "2. b", "3. c", END_MARKER, "footer"]
    assert lines == ["# Hello", START_MARKER, "footer"]


def test_markers_are_matched_after_trimming():
    lines = ["  " + START_MARKER + "  ", "\t" + END_MARKER]
    result = reconcile(lines, ["a"], PLAIN)
    assert result.state is SectionState.EMPTY
    assert result.lines == [lines[0], "1. a", lines[1]]


def test_empty_region_is_filled():
    result = reconcile([START_MARKER, END_MARKER, "tail"], ["a", "b"], PLAIN)
    assert result.state is SectionState.EMPTY
    assert result.lines == [START_MARKER, "1. a", "2. b", END_MARKER, "tail"]


def test_empty_region_stops_at_first_empty_entry():
    result = reconcile([START_MARKER, END_MARKER], ["a", "", "b"], PLAIN)
    assert result.lines == [START_MARKER, "1. a", END_MARKER]


def test_populated_region_overwritten_in_place():
    lines = ["# Hello", START_MARKER, "1. old", "2. older", END_MARKER, "footer"]
    result = reconcile(lines, ["a", "b"], PLAIN)
    assert result.state is SectionState.POPULATED
    assert result.lines == ["# Hello", START_MARKER, "1. a", "2. b", END_MARKER, "footer"]
    assert find_marker(result.lines, START_MARKER) == 1
    assert find_marker(result.lines, END_MARKER) == 4


def test_unchanged_section_is_a_no_op():
    lines = [START_MARKER, "1. a", "2. b", END_MARKER]
    result = reconcile(lines, ["a", "b"], PLAIN)
    assert result.state is SectionState.NO_CHANGE
    assert result.lines == lines


def test_second_pass_detects_no_change():
    first = reconcile(["intro", START_MARKER, "outro"], ["a", "b"], PLAIN)
    second = reconcile(first.lines, ["a", "b"], PLAIN)
    assert second.state is SectionState.NO_CHANGE

    markup = Formatter(html=True)
    first = reconcile([START_MARKER, END_MARKER], ["a", "b"], markup)
    assert first.lines[1] == '<p align="left">1. a</p>'
    assert reconcile(first.lines, ["a", "b"], markup).state is SectionState.NO_CHANGE


def test_blank_lines_in_region_are_kept():
    lines = [START_MARKER, "1. old", "", "2. old", END_MARKER]
    result = reconcile(lines, ["a", "b"], PLAIN)
    assert result.state is SectionState.POPULATED
    assert result.lines == [START_MARKER, "1. a", "", "2. b", END_MARKER]
    assert reconcile(result.lines, ["a", "b"], PLAIN).state is SectionState.NO_CHANGE


def test_stale_lines_beyond_new_entries_are_dropped():
    lines = [START_MARKER, "1. x", "2. y", "3. z", END_MARKER]
    result = reconcile(lines, ["a"], PLAIN)
    assert result.lines == [START_MARKER, "1. a", END_MARKER]


def test_extra_entries_follow_last_replaced_line():
    lines = [START_MARKER, "1. x", "", END_MARKER]
    result = reconcile(lines, ["a", "b", "c"], PLAIN)
    assert result.lines == [START_MARKER, "1. a", "2. b", "3. c", "", END_MARKER]


def test_end_marker_before_start_is_ignored():
    lines = [END_MARKER, START_MARKER]
    result = reconcile(lines, ["a"], PLAIN)
    assert result.state is SectionState.START_NO_END
    assert result.lines == [END_MARKER, START_MARKER, "1. a", END_MARKER]


def test_document_round_trip_preserves_text(tmp_path):
    path = tmp_path / "README.md"
    path.write_text("# Title\n\n" + START_MARKER + "\n" + END_MARKER + "\n", encoding="utf-8")
    lines = read_lines(path)
    assert lines[-1] == ""
    result = reconcile(lines, ["a"], PLAIN)
    write_lines(path, result.lines)
    assert path.read_text(encoding="utf-8") == f"# Title\n\n{START_MARKER}\n1. a\n{END_MARKER}\n"
    assert not (tmp_path / "README.md.tmp").exists()
