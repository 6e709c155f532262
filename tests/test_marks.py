from sqlalchemy.exc import SQLAlchemyError

from sms_portal.models.academic import Marks, Student

from conftest import add_student


def _student_id(app, reg_no="S001"):
    with app.app_context():
        return Student.query.filter_by(reg_no=reg_no).one().id


def _submit(client, student_id, tamil, english, maths, science, social_science):
    return client.post(f"/marks/{student_id}", data={
        "tamil": tamil,
        "english": english,
        "maths": maths,
        "science": science,
        "social_science": social_science,
    })


def test_marks_submission_stores_derived_fields(app, signed_in_client):
    add_student(signed_in_client)
    student_id = _student_id(app)

    response = _submit(signed_in_client, student_id, "90", "80", "70", "60", "95")

    assert response.status_code == 303
    assert response.headers["Location"].endswith("/marks/summary")

    with app.app_context():
        marks = Marks.query.one()
        assert (marks.total, marks.grade, marks.passed) == (395, "B", True)


def test_one_failing_subject_fails_the_record(app, signed_in_client):
    add_student(signed_in_client)
    _submit(signed_in_client, _student_id(app), "90", "80", "70", "20", "95")

    with app.app_context():
        marks = Marks.query.one()
        assert (marks.total, marks.grade, marks.passed) == (355, "B", False)


def test_malformed_scores_are_saved_as_zero(app, signed_in_client):
    add_student(signed_in_client)
    student_id = _student_id(app)

    signed_in_client.post(f"/marks/{student_id}", data={"tamil": "-4", "english": "abc", "maths": "40"})

    with app.app_context():
        marks = Marks.query.one()
        assert (marks.tamil, marks.english, marks.maths, marks.science, marks.social_science) == (
            0, 0, 40, 0, 0
        )
        assert (marks.total, marks.grade, marks.passed) == (40, "D", False)


def test_resubmission_keeps_history(app, signed_in_client):
    add_student(signed_in_client)
    student_id = _student_id(app)

    _submit(signed_in_client, student_id, "10", "10", "10", "10", "10")
    _submit(signed_in_client, student_id, "95", "95", "95", "95", "95")

    with app.app_context():
        totals = [m.total for m in Marks.query.order_by(Marks.id)]
        assert totals == [50, 475]


def test_summary_lists_newest_first(app, signed_in_client):
    add_student(signed_in_client, reg_no="S001", name="Anitha")
    add_student(signed_in_client, reg_no="S002", name="Bala")

    _submit(signed_in_client, _student_id(app, "S001"), "40", "40", "40", "40", "40")
    _submit(signed_in_client, _student_id(app, "S002"), "99", "99", "99", "99", "99")

    response = signed_in_client.get("/marks/summary")
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert body.index("Bala") < body.index("Anitha")
    assert "A+" in body
    assert "Pass" in body


def test_marks_form_for_existing_student(app, signed_in_client):
    add_student(signed_in_client)

    response = signed_in_client.get(f"/marks/{_student_id(app)}")

    assert response.status_code == 200
    assert b"social_science" in response.data


def test_non_numeric_or_missing_student_redirects(app, signed_in_client):
    for path in ("/marks/abc", "/marks/999"):
        assert signed_in_client.get(path).headers["Location"].endswith("/marks")

        response = signed_in_client.post(path, data={"tamil": "50"})
        assert response.status_code == 303
        assert response.headers["Location"].endswith("/marks")

    with app.app_context():
        assert Marks.query.count() == 0


def test_store_failure_rerenders_form(app, signed_in_client, monkeypatch):
    add_student(signed_in_client)
    student_id = _student_id(app)

    def broken(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr("sms_portal.marks.routes.record_marks", broken)

    response = _submit(signed_in_client, student_id, "50", "50", "50", "50", "50")

    assert response.status_code == 500
    assert b"Failed to save marks. Please try again." in response.data


def test_oversized_score_rerenders_form(app, signed_in_client):
    add_student(signed_in_client)
    student_id = _student_id(app)

    response = _submit(signed_in_client, student_id, "99999999999999999999", "50", "50", "50", "50")

    assert response.status_code == 500
    assert b"Failed to save marks. Please try again." in response.data
    with app.app_context():
        assert Marks.query.count() == 0


def test_student_id_is_read_from_its_leading_digits(app, signed_in_client):
    add_student(signed_in_client)
    student_id = _student_id(app)

    response = signed_in_client.get(f"/marks/{student_id}abc")
    assert response.status_code == 200
    assert b"S001" in response.data

    response = _submit(signed_in_client, f"{student_id}abc", "40", "40", "40", "40", "40")
    assert response.status_code == 303
    assert response.headers["Location"].endswith("/marks/summary")

    with app.app_context():
        assert Marks.query.one().student_id == student_id


def test_out_of_range_student_id_redirects(signed_in_client):
    for path in ("/marks/0", "/marks/99999999999999999999"):
        response = signed_in_client.get(path)

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/marks")
