"""Tests for USER CODE guard validation, extraction and merging."""

from lvgl_ui_gen.guards import (
    GuardDiagnostic,
    begin_marker,
    detect_malformed_guards,
    end_marker,
    extract_guarded_blocks,
    merge_guarded_blocks,
)

OLD_SOURCE = """\
static void ui_ok_click(lv_event_t * e) {
    /* USER CODE BEGIN ui_ok_click */
    printf("clicked\\n");
    /* USER CODE END ui_ok_click */
}

void ui_init(void)
{
    /* USER CODE BEGIN init */
    /* USER CODE END init */
}
"""


class TestMarkers:
    def test_marker_text(self):
        assert begin_marker("init") == "/* USER CODE BEGIN init */"
        assert end_marker("init") == "/* USER CODE END init */"


class TestDetectMalformed:
    def test_balanced_has_no_diagnostics(self):
        assert detect_malformed_guards(OLD_SOURCE) == []

    def test_missing_end(self):
        text = "/* USER CODE BEGIN foo */\nx();\n"
        diagnostics = detect_malformed_guards(text)
        assert diagnostics == [GuardDiagnostic("foo", "END")]
        assert str(diagnostics[0]) == "USER CODE BEGIN foo has no matching END"

    def test_missing_begin(self):
        text = "/* USER CODE END bar */"
        assert detect_malformed_guards(text) == [GuardDiagnostic("bar", "BEGIN")]

    def test_one_diagnostic_per_id(self):
        text = "/* USER CODE BEGIN foo */ /* USER CODE BEGIN foo */ /* USER CODE BEGIN a */ /* USER CODE END a */"
        assert detect_malformed_guards(text) == [GuardDiagnostic("foo", "END")]

    def test_end_before_begin_reports_both(self):
        text = "/* USER CODE END x */\n    lost();\n/* USER CODE BEGIN x */"
        assert detect_malformed_guards(text) == [GuardDiagnostic("x", "END"), GuardDiagnostic("x", "BEGIN")]

    def test_stray_end_before_a_balanced_pair(self):
        text = "/* USER CODE END x */ /* USER CODE BEGIN x */ /* USER CODE END x */"
        assert detect_malformed_guards(text) == [GuardDiagnostic("x", "BEGIN")]

    def test_repeated_balanced_pairs(self):
        text = ("/* USER CODE BEGIN x */ /* USER CODE END x */\n"
                "/* USER CODE BEGIN x */ /* USER CODE END x */")
        assert detect_malformed_guards(text) == []

    def test_tolerates_marker_spacing(self):
        text = "/*USER  CODE BEGIN x*/\n/*   USER CODE   END x   */"
        assert detect_malformed_guards(text) == []


class TestExtract:
    def test_captures_body_with_trailing_whitespace_trimmed(self):
        blocks = extract_guarded_blocks(OLD_SOURCE)
        assert blocks["ui_ok_click"] == '\n    printf("clicked\\n");'
        assert blocks["init"] == ""

    def test_end_before_begin_is_not_paired(self):
        text = "/* USER CODE END x */ junk /* USER CODE BEGIN x */"
        assert extract_guarded_blocks(text) == {}

    def test_repeated_id_pairs_first_begin_with_next_end(self):
        text = ("/* USER CODE BEGIN x */ first /* USER CODE END x */\n"
                "/* USER CODE BEGIN x */ second /* USER CODE END x */")
        assert extract_guarded_blocks(text) == {"x": " first"}

    def test_no_markers(self):
        assert extract_guarded_blocks("int main(void) { return 0; }") == {}


class TestMerge:
    FRESH = (
        "static void ui_ok_click(lv_event_t * e) {\n"
        "    /* USER CODE BEGIN ui_ok_click */\n"
        "    /* USER CODE END ui_ok_click */\n"
        "}\n"
    )

    def test_reinserts_preserved_body(self):
        result = merge_guarded_blocks(self.FRESH, {"ui_ok_click": "\n    do_it();"})
        assert result.text == (
            "static void ui_ok_click(lv_event_t * e) {\n"
            "    /* USER CODE BEGIN ui_ok_click */\n"
            "    do_it();\n"
            "    /* USER CODE END ui_ok_click */\n"
            "}\n"
        )
        assert result.preserved == ["ui_ok_click"]
        assert result.dropped == []

    def test_empty_block_leaves_text_untouched(self):
        result = merge_guarded_blocks(self.FRESH, {"ui_ok_click": ""})
        assert result.text == self.FRESH

    def test_unknown_regions_are_reported_as_dropped(self):
        result = merge_guarded_blocks(self.FRESH, {"gone": "\n    lost();", "empty_gone": ""})
        assert result.text == self.FRESH
        assert result.dropped == ["gone"]

    def test_regions_without_saved_content_keep_fresh_body(self):
        result = merge_guarded_blocks(self.FRESH, {})
        assert result.text == self.FRESH
        assert result.preserved == []

    def test_merge_then_extract_is_stable(self):
        body = "\n    int a = 1;\n\n    a++;"
        merged = merge_guarded_blocks(self.FRESH, {"ui_ok_click": body}).text
        assert extract_guarded_blocks(merged) == {"ui_ok_click": body}
        assert merge_guarded_blocks(merged, extract_guarded_blocks(merged)).text == merged

    def test_body_on_marker_line_is_kept(self):
        merged = merge_guarded_blocks(self.FRESH, {"ui_ok_click": " inline();"}).text
        assert "/* USER CODE BEGIN ui_ok_click */ inline();\n    /* USER CODE END ui_ok_click */" in merged
