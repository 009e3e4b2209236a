"""
Unit tests for the change correlator.
"""

import pytest

from react_router_endpoint_diff.analyzer.change_correlator import ChangeCorrelator
from react_router_endpoint_diff.analyzer.diff_lines import (
    contains_request_param_pattern,
    extract_line_content,
)
from react_router_endpoint_diff.models.diff import DiffFile, DiffHunk
from react_router_endpoint_diff.models.entry_point import (
    EntryPointDescriptor,
    EntryPointKind,
)
from react_router_endpoint_diff.models.report import ChangeKind
from react_router_endpoint_diff.parser.diff_parser import DiffParser

ROUTE_FILE = "app/routes/users/$userId.tsx"


def make_entry_point(kind: EntryPointKind, start: int, end: int) -> EntryPointDescriptor:
    return EntryPointDescriptor(kind=kind, name=kind.value, start_line=start, end_line=end)


def make_hunk(new_start: int, lines: list[str]) -> DiffHunk:
    new_lines = sum(1 for line in lines if line[0] in "+ ")
    old_lines = sum(1 for line in lines if line[0] in "- ")
    return DiffHunk(
        old_start=new_start,
        old_lines=old_lines,
        new_start=new_start,
        new_lines=new_lines,
        lines=lines,
    )


def make_file(hunks: list[DiffHunk], **kwargs) -> DiffFile:
    return DiffFile(old_path=ROUTE_FILE, new_path=ROUTE_FILE, hunks=hunks, **kwargs)


@pytest.fixture
def correlator() -> ChangeCorrelator:
    """Create a correlator for the default routes directory."""
    return ChangeCorrelator(routes_dir="app/routes")


class TestNewFiles:
    """Tests for files added by the diff."""

    def test_every_entry_point_is_new(self, correlator: ChangeCorrelator, new_file_diff: str) -> None:
        """Test that each entry point of an added file is reported as new."""
        diff_file = DiffParser.parse(new_file_diff).files[0]
        entry_points = [
            make_entry_point(EntryPointKind.LOADER, 3, 5),
            make_entry_point(EntryPointKind.ACTION, 7, 9),
        ]

        changes = correlator.correlate(diff_file, entry_points, new_file_diff)

        assert [c.change_type for c in changes] == [ChangeKind.NEW_ENDPOINT] * 2
        assert [c.entry_kind for c in changes] == [EntryPointKind.LOADER, EntryPointKind.ACTION]
        assert changes[0].route_path == "/users"
        assert changes[0].file_path == "app/routes/users.tsx"
        assert changes[0].description == "New loader function in new file"
        # The block lookup goes through the `--- /dev/null` header
        assert changes[0].relevant_diff == ""

    def test_new_file_without_entry_points(self, correlator: ChangeCorrelator, new_file_diff: str) -> None:
        """Test that an added file with no handlers yields nothing."""
        diff_file = DiffParser.parse(new_file_diff).files[0]

        assert correlator.correlate(diff_file, [], new_file_diff) == []

    def test_deleted_file(self, correlator: ChangeCorrelator, deleted_file_diff: str) -> None:
        """Test that deleted files never produce changes."""
        diff_file = DiffParser.parse(deleted_file_diff).files[0]
        entry_points = [make_entry_point(EntryPointKind.LOADER, 1, 1)]

        assert correlator.correlate(diff_file, entry_points, deleted_file_diff) == []


class TestNewEndpointHeuristic:
    """Tests for the added-line ratio test."""

    def test_exactly_threshold_is_not_new(self, correlator: ChangeCorrelator) -> None:
        """Test that a ratio of exactly 0.8 does not count as new."""
        hunk = make_hunk(1, ["+a", "+b", "+c", "+d", " e"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 5)

        assert correlator.is_entirely_new(entry_point, [hunk]) is False

    def test_above_threshold_is_new(self, correlator: ChangeCorrelator) -> None:
        """Test that 81 added lines out of 100 count as new."""
        hunk = make_hunk(1, ["+x"] * 81 + [" y"] * 19)
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 100)

        assert correlator.is_entirely_new(entry_point, [hunk]) is True

    def test_no_overlap(self, correlator: ChangeCorrelator) -> None:
        """Test that hunks outside the entry point are ignored."""
        hunk = make_hunk(30, ["+a", "+b"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 5)

        assert correlator.is_entirely_new(entry_point, [hunk]) is False
        assert correlator.correlate(make_file([hunk]), [entry_point], "") == []

    def test_counts_accumulate_across_hunks(self, correlator: ChangeCorrelator) -> None:
        """Test that the ratio is computed over all overlapping hunks."""
        # 4 of 4 added in the first hunk, 0 of 2 in the second: 4/6
        first = make_hunk(1, ["+a", "+b", "+c", "+d"])
        second = make_hunk(5, [" e", " f"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 6)

        assert correlator.is_entirely_new(entry_point, [first]) is True
        assert correlator.is_entirely_new(entry_point, [first, second]) is False

    def test_lines_outside_range_not_counted(self, correlator: ChangeCorrelator) -> None:
        """Test that only lines landing inside the entry point are counted."""
        hunk = make_hunk(1, [" a", " b", " c", "+d", "+e"])
        entry_point = make_entry_point(EntryPointKind.ACTION, 4, 5)

        counts = correlator.count_lines_in_range(entry_point, hunk)

        assert (counts.total, counts.added) == (2, 2)

    def test_custom_threshold(self) -> None:
        """Test that the threshold is configurable."""
        correlator = ChangeCorrelator(routes_dir="app/routes", new_endpoint_threshold=0.5)
        hunk = make_hunk(1, ["+a", "+b", " c"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 3)

        assert correlator.is_entirely_new(entry_point, [hunk]) is True


class TestParameterChangeHeuristic:
    """Tests for the request parameter pattern test."""

    def test_added_params_access(self, correlator: ChangeCorrelator, modified_action_diff: str) -> None:
        """Test that adding `params.userId` inside an action is reported."""
        diff_file = DiffParser.parse(modified_action_diff).files[0]
        entry_point = make_entry_point(EntryPointKind.ACTION, 3, 8)

        changes = correlator.correlate(diff_file, [entry_point], modified_action_diff)

        assert len(changes) == 1
        change = changes[0]
        assert change.change_type == ChangeKind.PARAMETER_CHANGE
        assert change.entry_kind == EntryPointKind.ACTION
        assert change.route_path == "/users/:userId"
        assert change.file_path == ROUTE_FILE
        assert change.description == "Request parameter pattern changes detected in action function"
        assert change.relevant_diff.split("\n") == [
            "--- a/app/routes/users/$userId.tsx",
            "+++ b/app/routes/users/$userId.tsx",
            '@@ -2,6 +2,7 @@ import { json } from "@remix-run/node";',
        ]

    def test_deleted_line_counts(self, correlator: ChangeCorrelator) -> None:
        """Test that removing a parameter access is also a change."""
        hunk = make_hunk(3, [" x", "-  const id = params.id;", " y"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 3, 5)

        assert correlator.has_parameter_changes(entry_point, [hunk]) is True

    def test_context_line_does_not_count(self, correlator: ChangeCorrelator) -> None:
        """Test that unchanged parameter accesses are not a change."""
        hunk = make_hunk(3, ["   const id = params.id;", "+  log(id);"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 3, 5)

        assert correlator.has_parameter_changes(entry_point, [hunk]) is False

    def test_change_outside_range(self, correlator: ChangeCorrelator) -> None:
        """Test that a matching line before the entry point is ignored."""
        hunk = make_hunk(1, ["+const id = params.id;", " a", " b"])
        entry_point = make_entry_point(EntryPointKind.LOADER, 2, 3)

        assert correlator.has_parameter_changes(entry_point, [hunk]) is False


class TestCorrelate:
    """Tests for combining both heuristics."""

    def test_both_heuristics(self, correlator: ChangeCorrelator) -> None:
        """Test that a new entry point reading params yields two records."""
        hunk = make_hunk(10, [
            "+export const loader = ({ params }) => {",
            "+  const id = params.id;",
            "+  return id;",
            "+};",
            "+",
            " export default function Page() {}",
        ])
        entry_point = make_entry_point(EntryPointKind.LOADER, 10, 15)

        changes = correlator.correlate(make_file([hunk]), [entry_point], "")

        assert [c.change_type for c in changes] == [
            ChangeKind.NEW_ENDPOINT,
            ChangeKind.PARAMETER_CHANGE,
        ]
        assert changes[0].description == "New loader function added to existing file"

    def test_new_endpoints_listed_first(self, correlator: ChangeCorrelator) -> None:
        """Test that new endpoints precede parameter changes within a file."""
        param_hunk = make_hunk(1, [" a", "+  const id = params.id;", " b"])
        new_hunk = make_hunk(10, ["+x"] * 6)
        loader = make_entry_point(EntryPointKind.LOADER, 1, 4)
        action = make_entry_point(EntryPointKind.ACTION, 10, 15)

        changes = correlator.correlate(make_file([param_hunk, new_hunk]), [loader, action], "")

        assert [(c.change_type, c.entry_kind) for c in changes] == [
            (ChangeKind.NEW_ENDPOINT, EntryPointKind.ACTION),
            (ChangeKind.PARAMETER_CHANGE, EntryPointKind.LOADER),
        ]

    def test_custom_route_mapper(self) -> None:
        """Test that the route mapper can be swapped."""
        correlator = ChangeCorrelator(
            routes_dir="app/routes",
            route_mapper=lambda file_path, routes_dir: f"custom:{file_path}",
        )
        hunk = make_hunk(1, ["+x"] * 5)
        entry_point = make_entry_point(EntryPointKind.LOADER, 1, 5)

        (change,) = correlator.correlate(make_file([hunk]), [entry_point], "")

        assert change.route_path == f"custom:{ROUTE_FILE}"


class TestDiffLines:
    """Tests for the per-line helpers."""

    @pytest.mark.parametrize(
        "line",
        [
            "+  const id = params.id;",
            "-  const body = await request.json();",
            "+  const form = await request.formData();",
            "+  const q = url.searchParams.get('q');",
            "+  const name = formData.get('name');",
            "+  const raw = await request.text();",
        ],
    )
    def test_matching_lines(self, line: str) -> None:
        """Test lines that read request parameters."""
        assert contains_request_param_pattern(line) is True

    @pytest.mark.parametrize(
        "line",
        [
            "+  return json({ ok: true });",
            "+  const url = new URL(request.url);",
            "   const headers = request.headers;",
        ],
    )
    def test_non_matching_lines(self, line: str) -> None:
        """Test lines that do not read request parameters."""
        assert contains_request_param_pattern(line) is False

    def test_extract_line_content(self) -> None:
        """Test stripping the diff marker."""
        assert extract_line_content("+abc") == "abc"
        assert extract_line_content("- abc") == " abc"
        assert extract_line_content("  abc") == " abc"
        assert extract_line_content("abc") == "abc"
