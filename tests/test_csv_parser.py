from import_engine.csv_parser import parse_csv
from tests.factories import make_csv, question_row


def test_valid_file_parses_all_rows():
    content = make_csv([question_row("Q1?", "a"), question_row("Q2?", "D")])
    result = parse_csv(content)

    assert result.success
    assert result.errors == []
    assert [r.question for r in result.rows] == ["Q1?", "Q2?"]
    assert result.rows[1].correct == "d"


def test_empty_file_is_structural_error():
    result = parse_csv(b"")
    assert not result.success
    assert result.rows == []
    assert [e.to_dict() for e in result.errors] == [
        {"row": 0, "error": "CSV file is empty or contains only headers"}
    ]


def test_header_only_is_structural_error():
    result = parse_csv(make_csv([]))
    assert [e.row for e in result.errors] == [0]
    assert result.errors[0].error == "CSV file is empty or contains only headers"


def test_missing_column_is_named():
    header = ["question", "answer_a", "answer_b", "answer_d", "correct"]
    result = parse_csv(make_csv([["Q?", "a", "b", "d", "a"]], header=header))

    assert result.rows == []
    assert len(result.errors) == 1
    assert result.errors[0].row == 0
    assert result.errors[0].error == "Missing required columns: answer_c"


def test_missing_columns_listed_in_order():
    result = parse_csv(make_csv([["Q?", "a"]], header=["question", "answer_a"]))
    assert result.errors[0].error == (
        "Missing required columns: answer_b, answer_c, answer_d, correct"
    )


def test_column_names_are_case_sensitive():
    header = ["Question", "answer_a", "answer_b", "answer_c", "answer_d", "correct"]
    result = parse_csv(make_csv([question_row("Q?")], header=header))
    assert result.errors[0].error == "Missing required columns: question"


def test_unterminated_quote_is_structural_error():
    content = make_csv([question_row("Q1?")]) + b'"Unclosed,a,b,c,d,a\n'
    result = parse_csv(content)

    assert result.rows == []
    assert len(result.errors) == 1
    assert result.errors[0].row == 0
    assert result.errors[0].error.startswith("CSV parsing error:")


def test_inconsistent_column_count_is_structural_error():
    content = make_csv([question_row("Q1?"), ["Q2?", "a", "b", "a"]])
    result = parse_csv(content)

    assert result.rows == []
    assert result.errors[0].row == 0
    assert result.errors[0].error.startswith("CSV parsing error:")


def test_row_numbers_start_at_two():
    content = make_csv([
        question_row("Q1?"),
        question_row("", "a"),
        question_row("Q3?", "x"),
    ])
    result = parse_csv(content)

    assert not result.success
    assert [r.question for r in result.rows] == ["Q1?"]
    assert [(e.row, e.error) for e in result.errors] == [
        (3, "Question text cannot be empty"),
        (4, "Correct answer must be 'a', 'b', 'c', or 'd' (got 'x')"),
    ]


def test_bad_row_does_not_stop_later_rows():
    content = make_csv([
        question_row("Q1?"),
        question_row("Q2?", answers=["", "", "", ""]),
        question_row("Q3?"),
    ])
    result = parse_csv(content)

    assert [r.question for r in result.rows] == ["Q1?", "Q3?"]
    assert {e.row for e in result.errors} == {3}
    assert len(result.errors) == 4


def test_fields_are_trimmed_and_correct_lowercased():
    content = make_csv([["  Q?  ", " A ", "B", " C", "D ", " B "]])
    row = parse_csv(content).rows[0]

    assert row.question == "Q?"
    assert (row.answer_a, row.answer_b, row.answer_c, row.answer_d) == ("A", "B", "C", "D")
    assert row.correct == "b"


def test_bom_and_header_whitespace_are_ignored():
    header = [" question", "answer_a ", "answer_b", "answer_c", "answer_d", "correct"]
    content = b"\xef\xbb\xbf" + make_csv([question_row("Q?")], header=header)
    result = parse_csv(content)

    assert result.success
    assert result.rows[0].question == "Q?"


def test_blank_lines_are_skipped():
    content = make_csv([question_row("Q1?")]) + b"\n\n" + make_csv(
        [question_row("Q2?", "z")], header=None)
    result = parse_csv(content)

    assert [r.question for r in result.rows] == ["Q1?"]
    assert [e.row for e in result.errors] == [3]


def test_extra_columns_are_ignored():
    header = ["id", "question", "answer_a", "answer_b", "answer_c", "answer_d", "correct"]
    content = make_csv([["7", *question_row("Q?")]], header=header)
    result = parse_csv(content)

    assert result.success
    assert result.rows[0].question == "Q?"


def test_quoted_fields_with_commas_and_newlines():
    content = make_csv([["Which, exactly?\nPick one", "a, b", "c", "d", "e", "a"]])
    row = parse_csv(content).rows[0]

    assert row.question == "Which, exactly?\nPick one"
    assert row.answer_a == "a, b"


def test_accepts_str_input():
    result = parse_csv(make_csv([question_row("Q?")]).decode("utf-8"))
    assert result.success
