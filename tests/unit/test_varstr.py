"""Tests for placeholder expansion."""

import pytest

from solar_app.varstr import expand, placeholders

ADDRESSES = {
    "Token": "0xabc",
    "Foo_2": "0x222",
}


def lookup(name: str) -> str:
    if name not in ADDRESSES:
        raise KeyError(name)
    return ADDRESSES[name]


class TestExpand:
    """Test template scanning and substitution."""

    def test_bare_placeholder(self):
        assert expand("addr=$Token", lookup) == "addr=0xabc"

    def test_delimited_placeholder(self):
        assert expand("addr=${Token}", lookup) == "addr=0xabc"

    def test_delimited_placeholder_adjacent_text(self):
        assert expand("${Token}suffix", lookup) == "0xabcsuffix"

    def test_bare_placeholder_stops_at_non_ident(self):
        assert expand('["$Token", "$Foo_2"]', lookup) == '["0xabc", "0x222"]'

    def test_no_placeholders(self):
        assert expand("no vars here", lookup) == "no vars here"

    def test_empty_template(self):
        assert expand("", lookup) == ""

    def test_dollar_escape(self):
        assert expand("cost $$5 to $Token", lookup) == "cost $5 to 0xabc"

    @pytest.mark.parametrize("template", ["$", "price: $5", "${", "${Token", "${}", "${1abc}", "a $ b"])
    def test_malformed_forms_pass_through(self, template):
        assert expand(template, lookup) == template

    def test_mapping_error_aborts(self):
        with pytest.raises(KeyError):
            expand("$Token $Missing", lookup)

    def test_substitution_is_not_rescanned(self):
        result = expand("$Outer", lambda name: "$Token")
        assert result == "$Token"

    def test_left_to_right_order(self):
        seen = []

        def record(name: str) -> str:
            seen.append(name)
            return name.lower()

        assert expand("$A-${B}-$C", record) == "a-b-c"
        assert seen == ["A", "B", "C"]


class TestPlaceholders:
    """Test placeholder listing."""

    def test_lists_names_in_order(self):
        assert placeholders('{"a": "$Token", "b": "${Foo_2}", "c": "$Token"}') == [
            "Token", "Foo_2", "Token"
        ]

    def test_escape_is_not_a_placeholder(self):
        assert placeholders("$$Token") == []
