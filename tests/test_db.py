import json

from examcheck.database import db
from examcheck.schemas import AnswerKey, AnswerSet
from examcheck.services.scoring_service import grade


def test_save_and_search_students():
    created = db.save_students(["Priya Sharma", "Rahul Verma", "Priyanka Das"], "JEE")
    db.save_students(["Priya Nair"], "NEET")

    assert len(created) == 3
    assert all(s["batch"] == "JEE" for s in created)

    names = [s["name"] for s in db.search_students("pri")]
    assert names == ["Priya Sharma", "Priyanka Das", "Priya Nair"]

    jee_only = [s["name"] for s in db.search_students("PRI", batch="JEE")]
    assert jee_only == ["Priya Sharma", "Priyanka Das"]

    assert len(db.search_students("pri", limit=1)) == 1
    assert db.search_students("   ") == []


def test_save_students_writes_in_chunks(monkeypatch):
    monkeypatch.setattr(db, "IMPORT_CHUNK_SIZE", 2)
    writes = []
    original = db.save_json_data

    def recording_save(path, data):
        writes.append(len(data))
        return original(path, data)

    monkeypatch.setattr(db, "save_json_data", recording_save)
    created = db.save_students(["A", "B", "C", "D", "E"], "JEE")

    assert len(created) == 5
    assert writes == [2, 4, 5]


def test_get_student_includes_id():
    created = db.save_students(["Asha"], "JEE")
    student = db.get_student(created[0]["id"])
    assert student["name"] == "Asha"
    assert student["id"] == created[0]["id"]
    assert db.get_student("missing") is None


def test_tests_round_trip_answer_key():
    key = AnswerKey(physics={"mcq": ["A", "B"], "numeric": ["3"]})
    test = db.save_test("JEE Mock Test 01", key)

    stored = db.get_test(test["id"])
    assert stored["test_name"] == "JEE Mock Test 01"
    assert len(stored["mcq_key"]["physics"]) == 20
    assert stored["numerical_key"]["maths"] == [""] * 5
    assert db.get_test_answer_key(stored) == key


def test_get_tests_newest_first(data_dir):
    (data_dir / "tests.json").write_text(json.dumps({
        "t1": {"test_name": "Old", "created_at": "2024-01-01T10:00:00"},
        "t2": {"test_name": "New", "created_at": "2024-03-01T10:00:00"},
        "t3": {"test_name": "Mid", "created_at": "2024-02-01T10:00:00"},
    }))

    assert [t["test_name"] for t in db.get_tests()] == ["New", "Mid", "Old"]
    assert [t["id"] for t in db.get_tests(limit=2)] == ["t2", "t3"]


def test_save_result_and_filter():
    student = db.save_students(["Asha"], "JEE")[0]
    other = db.save_students(["Ravi"], "JEE")[0]
    key = AnswerKey(physics={"mcq": ["A"] * 20})
    test = db.save_test("Mock", key)
    answers = AnswerSet(physics={"mcq": ["A"] * 19 + ["B"]})
    report = grade(key, answers)

    result = db.save_result(student, test, answers, report)
    db.save_result(other, test, AnswerSet(), grade(key, AnswerSet()))

    assert result["marks"] == {"physics": 75, "chemistry": 0, "maths": 0, "total": 75}
    assert result["wrong_questions"]["physics"] == [20]
    assert result["student_name"] == "Asha"
    assert result["mcq_answers"]["physics"][19] == "B"

    assert len(db.get_results(test_id=test["id"])) == 2
    mine = db.get_results(student_id=student["id"])
    assert [r["id"] for r in mine] == [result["id"]]


def test_corrupted_file_is_backed_up_and_reset(data_dir):
    path = data_dir / "students.json"
    path.write_text("{not json")

    assert db.get_students() == {}
    assert json.loads(path.read_text()) == {}
    assert list(data_dir.glob("students.bak.*"))
