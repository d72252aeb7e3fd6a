"""Tests for the LSA block splitter."""

from ospfscope.topology.parsers.blocks import iter_content_blocks, split_lsa_blocks


class TestSplitLsaBlocks:
    def test_empty_input(self):
        assert split_lsa_blocks([]) == []
        assert split_lsa_blocks([""]) == []

    def test_area_header_emits_pseudo_block(self):
        blocks = split_lsa_blocks(["                Router Link States (Area 0)"])
        assert len(blocks) == 1
        assert blocks[0].is_area_header
        assert blocks[0].area == "0"
        assert blocks[0].lines == []

    def test_header_variants(self):
        lines = [
            "Router Link States (Area 0)",
            "Net Link States (Area 1)",
            "Summary Net Link States (Area 0.0.0.2)",
            "Summary ASB Link States (Area 3)",
            "Type-7 AS External Link States (Area 4)",
        ]
        blocks = split_lsa_blocks(lines)
        assert [b.area for b in blocks] == ["0", "1", "0.0.0.2", "3", "4"]
        assert all(b.is_area_header for b in blocks)

    def test_ls_age_starts_content_block(self):
        lines = [
            "  LS age: 10",
            "  LS Type: Router Links",
            "  LS age: 20",
            "  LS Type: Network Links",
        ]
        blocks = split_lsa_blocks(lines)
        assert len(blocks) == 2
        assert blocks[0].lines == ["  LS age: 10", "  LS Type: Router Links"]
        assert blocks[1].lines == ["  LS age: 20", "  LS Type: Network Links"]

    def test_maxage_starts_block(self):
        blocks = split_lsa_blocks(["  LS age: MAXAGE(3600)", "  LS Type: Router Links"])
        assert len(blocks) == 1
        assert not blocks[0].is_area_header

    def test_lines_before_first_block_are_dropped(self):
        lines = [
            "R1#show ip ospf database",
            "            OSPF Router with ID (1.1.1.1) (Process ID 1)",
            "  LS age: 5",
        ]
        blocks = split_lsa_blocks(lines)
        assert len(blocks) == 1
        assert blocks[0].lines == ["  LS age: 5"]

    def test_command_marker_joins_open_block(self):
        lines = ["  LS age: 5", "R1#show ip ospf database network", "  LS Type: Router Links"]
        blocks = split_lsa_blocks(lines)
        assert len(blocks) == 1
        assert "R1#show ip ospf database network" in blocks[0].lines

    def test_header_flushes_open_block(self):
        lines = ["  LS age: 5", "  LS Type: Router Links", "Net Link States (Area 1)", "  LS age: 6"]
        blocks = split_lsa_blocks(lines)
        assert [b.is_area_header for b in blocks] == [False, True, False]
        assert blocks[0].lines == ["  LS age: 5", "  LS Type: Router Links"]


class TestIterContentBlocks:
    def test_tracks_current_area(self):
        lines = [
            "  LS age: 1",
            "Router Link States (Area 0)",
            "  LS age: 2",
            "Router Link States (Area 5)",
            "  LS age: 3",
            "  LS age: 4",
        ]
        areas = [area for area, _ in iter_content_blocks(split_lsa_blocks(lines))]
        assert areas == ["0", "0", "5", "5"]

    def test_default_area(self):
        blocks = split_lsa_blocks(["  LS age: 1"])
        assert [a for a, _ in iter_content_blocks(blocks, default_area="7")] == ["7"]

    def test_sample_capture(self, database_router):
        blocks = split_lsa_blocks(database_router.split("\n"))
        content = list(iter_content_blocks(blocks))
        assert len(content) == 5
        assert [area for area, _ in content] == ["0", "0", "0", "1", "1"]
