from examcheck.services.roster_service import parse_names_from_csv


def test_single_column_with_header():
    text = "Name\nPriya Sharma\nRahul Verma\n"
    assert parse_names_from_csv(text) == ["Priya Sharma", "Rahul Verma"]


def test_student_header_marker_is_case_insensitive():
    assert parse_names_from_csv("STUDENT LIST\nAsha") == ["Asha"]


def test_first_line_kept_when_not_a_header():
    assert parse_names_from_csv("Asha,12\nRavi,14") == ["Asha", "Ravi"]


def test_takes_first_column_and_strips_quotes():
    text = 'student_name,roll\r\n"Priya Sharma",1\r\n  "Kabir" , 2\r\n'
    assert parse_names_from_csv(text) == ["Priya Sharma", "Kabir"]


def test_dedupes_case_insensitively_keeping_first_spelling():
    text = "Asha\nasha\nRavi\nASHA\nravi"
    assert parse_names_from_csv(text) == ["Asha", "Ravi"]


def test_skips_blank_lines_and_empty_names():
    text = "\n\nAsha\n   \n,42\n\"\"\nRavi\n"
    assert parse_names_from_csv(text) == ["Asha", "Ravi"]


def test_empty_input():
    assert parse_names_from_csv("") == []
    assert parse_names_from_csv("name\n") == []
