from __future__ import annotations

import pytest

from hw_wallet.serializer import OutputFormat, render_result


def test_yaml_is_block_style_in_insertion_order() -> None:
    value = [{"address": "1abc", "index": 0}, {"address": "1def", "index": 1}]

    assert render_result(value, OutputFormat.YAML) == (
        "- address: 1abc\n  index: 0\n- address: 1def\n  index: 1"
    )


def test_json_uses_two_space_indent() -> None:
    value = {"balance": 10, "coins": [1, 2]}

    assert render_result(value, OutputFormat.JSON) == (
        '{\n  "balance": 10,\n  "coins": [\n    1,\n    2\n  ]\n}'
    )


def test_yaml_scalar_has_no_document_end_marker() -> None:
    assert render_result("txid123", OutputFormat.YAML) == "txid123"


@pytest.mark.parametrize("output_format", list(OutputFormat))
def test_null_result_renders_nothing(output_format: OutputFormat) -> None:
    assert render_result(None, output_format) is None
