from app.core.domain.signatures import (
    SignatureInfo,
    append_signatures_section,
    build_centered_name_line,
)


def test_centered_name_line_defaults():
    line = build_centered_name_line("Kunal")
    assert len(line) == 32
    assert line == "_" * 13 + "Kunal" + "_" * 14


def test_centered_name_line_blank_name():
    assert build_centered_name_line("") == "_" * 32
    assert build_centered_name_line("   \t ") == "_" * 32
    assert build_centered_name_line(None) == "_" * 32


def test_centered_name_line_blank_respects_total_length():
    assert build_centered_name_line("", total_length=10) == "_" * 10


def test_centered_name_line_long_name_falls_back():
    name = "ASuperLongNameThatExceedsTheBudget"
    assert build_centered_name_line(name) == f"___{name}___"


def test_centered_name_line_fallback_ignores_sizes():
    assert build_centered_name_line("Kunal", total_length=8, min_padding=2) == "___Kunal___"


def test_centered_name_line_strips_inner_whitespace():
    assert build_centered_name_line(" Mary  Ann ") == "_" * 12 + "MaryAnn" + "_" * 13


def test_centered_name_line_exact_fit():
    # 26 chars leaves exactly 3 underscores per side.
    name = "A" * 26
    assert build_centered_name_line(name) == "___" + name + "___"


def test_append_signatures_section_layout():
    text = append_signatures_section(
        "Body text.", {"homeownerName": "Kunal", "contractorName": "Rohit"}
    )
    assert text.split("\n") == [
        "Body text.",
        "",
        "Signatures",
        "",
        "_" * 13 + "Kunal" + "_" * 14,
        "Homeowner Printed Name",
        "",
        "_" * 13 + "Rohit" + "_" * 14,
        "Contractor Printed Name",
    ]


def test_append_signatures_section_trims_trailing_whitespace():
    info = SignatureInfo(homeowner_name="Kunal", contractor_name="")
    text = append_signatures_section("Body text.  \n\n", info)
    lines = text.split("\n")
    assert lines[0] == "Body text."
    assert lines[7] == "_" * 32


def test_append_signatures_section_is_deterministic():
    info = SignatureInfo(homeowner_name="Kunal", contractor_name="Rohit")
    assert append_signatures_section("x", info) == append_signatures_section("x", info)
