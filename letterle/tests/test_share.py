"""
Tests for share text formatting.
"""

from ..engine_core.share import share_text
from ..engine_core.state import Theme


class TestShareText:
    """Tests for the share summary."""

    def test_layout(self):
        text = share_text(["a", "l", "m"], "m", [3, 5, 3], 3, Theme.LIGHT)
        lines = text.split("\n")

        assert lines[0] == "Find Phunk  #3  3/26"
        assert lines[1] == "Average (4)  |  Personal Best (3)"
        assert lines[2] == "https://ajames.dev/find-phunk"
        assert lines[3] == ""
        assert text.endswith("\n\n")

    def test_grid_follows_keyboard_layout(self):
        text = share_text(["q", "a", "m"], "m", [3], 3, Theme.LIGHT)
        rows = text.split("\n")[4:7]

        cells = [row.split(" ") for row in rows]
        assert [len(row) for row in cells] == [10, 9, 7]
        # q is the first key, a opens the second row, m closes the third
        assert cells[0][0] == "🔳"
        assert cells[1][0] == "🔳"
        assert cells[2][-1] == "🟩"

    def test_close_glyph(self):
        text = share_text(["n"], "m", [], 1, Theme.LIGHT)
        rows = text.split("\n")[4:7]
        # n is second to last on the bottom row
        assert rows[2].split(" ")[-2] == "🟨"

    def test_unguessed_glyph_follows_theme(self):
        light = share_text(["m"], "m", [1], 1, Theme.LIGHT)
        dark = share_text(["m"], "m", [1], 1, Theme.DARK)

        assert light.count("⬜") == 25
        assert "⬛" not in light
        assert dark.count("⬛") == 25
        assert "⬜" not in dark

    def test_missing_stats(self):
        text = share_text([], "m", [], 0, Theme.LIGHT)
        assert text.split("\n")[1] == "Average (-)  |  Personal Best (-)"

    def test_deterministic(self):
        args = (["a", "m"], "m", [2, 7], 2, Theme.DARK)
        assert share_text(*args) == share_text(*args)
