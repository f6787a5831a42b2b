import textwrap

from skills import NO_DESCRIPTION, extract_description


def test_description_line_is_returned_without_quotes() -> None:
    text = textwrap.dedent(
        """
        ---
        name: demo
        description: "Demo skill for tests"
        ---

        Body text that should not be used.
        """
    )
    assert extract_description(text) == "Demo skill for tests"


def test_description_line_wins_even_after_body_text() -> None:
    text = "# Title\n\nFirst paragraph.\n\ndescription: Late description\ndescription: second\n"
    assert extract_description(text) == "Late description"


def test_description_is_trimmed_and_indented_lines_match() -> None:
    assert extract_description('   description:    "  padded "   ') == "  padded "
    assert extract_description("  description: plain value  ") == "plain value"


def test_only_one_layer_of_quotes_is_removed() -> None:
    assert extract_description('description: ""quoted""') == '"quoted"'


def test_empty_description_value_is_returned_as_is() -> None:
    assert extract_description("description:\nSomething else") == ""


def test_fallback_skips_headings_and_fences() -> None:
    text = "---\n# Heading\n\n## Sub\n   \nActual first line.\nSecond line.\n"
    assert extract_description(text) == "Actual first line."


def test_fallback_truncates_to_100_characters() -> None:
    line = "x" * 150
    assert extract_description(line) == "x" * 100


def test_truncation_counts_characters_not_bytes() -> None:
    line = "技能" * 80
    result = extract_description(line)
    assert len(result) == 100
    assert result == ("技能" * 50)


def test_no_usable_line_gives_placeholder() -> None:
    assert extract_description("") == NO_DESCRIPTION
    assert extract_description("# Only a heading\n---\n\n") == NO_DESCRIPTION
