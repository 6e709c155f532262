import pytest

from sms_portal import create_app
from sms_portal.config import TestConfig


EMAIL = "Staff@Example.com"
PASSWORD = "s3cret-pass"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def sign_up(client, email=EMAIL, password=PASSWORD, confirm_password=None):
    return client.post("/signup", data={
        "name": "Staff Member",
        "email": email,
        "password": password,
        "confirm_password": password if confirm_password is None else confirm_password,
    })


def sign_in(client, email=EMAIL, password=PASSWORD):
    return client.post("/signin", data={"email": email, "password": password})


@pytest.fixture
def signed_in_client(client):
    sign_up(client)
    response = sign_in(client)
    assert response.status_code == 303
    return client


def add_student(client, reg_no="S001", name="Anitha", email="Anitha@School.org", department="Science"):
    return client.post("/students", data={
        "reg_no": reg_no,
        "name": name,
        "email": email,
        "department": department,
    })
