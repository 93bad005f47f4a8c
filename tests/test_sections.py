from datetime import date

from app.services.sections import calculate_age

from conftest import ADMIN_ID, API

CANDIDATE = {
    "personalDetails": {
        "fatherName": "Mohan Lal",
        "motherName": "Sita Devi",
        "gender": "male",
        "maritalStatus": "single",
        "nationality": "Indian",
        "religion": "",
        "category": "obc",
    },
    "benchmarkDisability": {"isDisabled": False},
    "exServicemen": {"isExServicemen": False},
    "employeeDetails": {},
    "wclDetails": {},
    "correspondenceAddress": {
        "addressLine1": "12 Station Road",
        "state": "Jharkhand",
        "cityDistrict": "Ranchi",
        "pincode": "834001",
    },
    "permanentAddress": {"sameAsCorrespondence": True, "addressLine1": "ignored"},
    "dobDetails": {"dateOfBirth": "2000-02-29"},
}

QUALIFICATION = {
    "matriculation": {"boardName": "JAC", "yearOfPassing": "2016", "rollNumber": "1601", "percentage": "78"},
    "intermediate": {"boardName": "JAC", "yearOfPassing": "2018", "stream": "Science"},
    "iti": {"instituteName": "Govt ITI Ranchi", "trade": "Fitter", "duration": "2 years"},
    "examCityPreference": {"city1": "Ranchi", "city2": "Dhanbad", "city3": "Bokaro"},
}


def test_new_applicant_sections_are_empty(client, register):
    applicant = register()
    user_id = applicant["userId"]

    candidate = client.get(f"{API}/candidate-details/{user_id}").json()
    assert candidate["candidateDetails"]["postCode"] == "JE-01"
    assert candidate["candidateDetails"]["personalDetails"] == {}
    assert candidate["candidateDetails"]["benchmarkDisability"] == {"isDisabled": False}
    assert candidate["candidateDetailsStatus"] == {"allSectionsCompleted": False}

    qualification = client.get(f"{API}/qualification-details/{user_id}").json()
    assert qualification["qualificationDetailsStatus"] == {"allQualificationSectionsCompleted": False}

    payment = client.get(f"{API}/payment-details/{user_id}").json()
    assert payment["paymentDetails"]["paymentStatus"] == "pending"
    assert payment["paymentDetails"]["utrNumber"] is None
    assert payment["paymentDetailsStatus"] == {"paymentCompleted": False}


def test_candidate_details_round_trip(client, register):
    user_id = register()["userId"]

    saved = client.put(f"{API}/candidate-details/{user_id}", json=CANDIDATE)
    assert saved.status_code == 200
    assert saved.json()["candidateDetailsStatus"]["allSectionsCompleted"] is True

    details = client.get(f"{API}/candidate-details/{user_id}").json()["candidateDetails"]
    personal = details["personalDetails"]
    assert personal["fatherName"] == "Mohan Lal"
    assert personal["category"] == "obc"
    # Blank strings are not stored
    assert "religion" not in personal

    # Permanent address mirrors correspondence when flagged
    permanent = details["permanentAddress"]
    assert permanent["sameAsCorrespondence"] is True
    assert permanent["addressLine1"] == "12 Station Road"
    assert permanent["pincode"] == "834001"
    assert details["correspondenceAddress"]["country"] == "India"

    assert details["dobDetails"]["dateOfBirth"] == "2000-02-29"
    assert details["dobDetails"]["calculatedAge"] == calculate_age(date(2000, 2, 29))


def test_candidate_put_replaces_whole_sub_profile(client, register):
    user_id = register()["userId"]
    client.put(f"{API}/candidate-details/{user_id}", json=CANDIDATE)

    client.put(f"{API}/candidate-details/{user_id}", json={"personalDetails": {"fatherName": "Only Field"}})

    details = client.get(f"{API}/candidate-details/{user_id}").json()["candidateDetails"]
    assert details["personalDetails"] == {"fatherName": "Only Field"}
    assert "addressLine1" not in details["correspondenceAddress"]


def test_candidate_details_rejects_bad_enum(client, register):
    user_id = register()["userId"]

    response = client.put(f"{API}/candidate-details/{user_id}", json={"personalDetails": {"gender": "robot"}})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_qualification_round_trip(client, register):
    user_id = register()["userId"]

    saved = client.put(f"{API}/qualification-details/{user_id}", json=QUALIFICATION)
    assert saved.status_code == 200
    assert saved.json()["qualificationDetailsStatus"]["allQualificationSectionsCompleted"] is True

    fetched = client.get(f"{API}/qualification-details/{user_id}").json()
    assert fetched["qualificationDetails"]["matriculation"]["rollNumber"] == "1601"
    assert fetched["qualificationDetails"]["examCityPreference"]["city3"] == "Bokaro"


def test_blank_qualification_is_not_complete(client, register):
    user_id = register()["userId"]

    saved = client.put(f"{API}/qualification-details/{user_id}", json={
        "matriculation": {"boardName": "", "percentage": "  "},
    })

    assert saved.status_code == 200
    assert saved.json()["qualificationDetailsStatus"]["allQualificationSectionsCompleted"] is False
    assert saved.json()["qualificationDetails"]["matriculation"] == {}


def test_blank_personal_details_are_not_stored(client, register):
    user_id = register()["userId"]

    saved = client.put(f"{API}/candidate-details/{user_id}", json={
        "personalDetails": {"fatherName": " ", "religion": "", "gender": ""},
    })

    assert saved.status_code == 200
    assert saved.json()["candidateDetails"]["personalDetails"] == {}
    assert saved.json()["candidateDetailsStatus"]["allSectionsCompleted"] is False


def test_sections_unknown_applicant(client):
    for section in ("candidate", "qualification", "document", "payment"):
        response = client.get(f"{API}/{section}-details/IOCL000001")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found"}


def test_sections_reject_admin_id(client):
    get_payment = client.get(f"{API}/payment-details/{ADMIN_ID}")
    put_payment = client.put(f"{API}/payment-details/{ADMIN_ID}", json={"utrNumber": "UTR1"})
    get_candidate = client.get(f"{API}/candidate-details/{ADMIN_ID}")

    for response in (get_payment, put_payment, get_candidate):
        assert response.status_code == 400
        assert response.json()["success"] is False


def test_payment_submission(client, register):
    user_id = register()["userId"]

    response = client.put(f"{API}/payment-details/{user_id}", json={"utrNumber": " UTR123456789 "})

    assert response.status_code == 200
    details = response.json()["paymentDetails"]
    assert details["utrNumber"] == "UTR123456789"
    assert details["paymentStatus"] == "processing"
    assert details["paymentDate"] is not None
    assert response.json()["paymentDetailsStatus"] == {"paymentCompleted": True}


def test_payment_requires_utr(client, register):
    user_id = register()["userId"]

    response = client.put(f"{API}/payment-details/{user_id}", json={"utrNumber": ""})

    assert response.status_code == 400


def test_user_progress_follows_sections(client, register):
    user_id = register()["userId"]

    def progress():
        body = client.get(f"{API}/user-progress/{user_id}").json()
        return body["step"], body["currentRoute"], body["progress"]

    assert progress()[:2] == ("candidate", "/dashboard/candidate-details")

    client.put(f"{API}/candidate-details/{user_id}", json=CANDIDATE)
    assert progress()[:2] == ("qualification", "/dashboard/qualification-details")

    client.put(f"{API}/qualification-details/{user_id}", json=QUALIFICATION)
    assert progress()[:2] == ("documents", "/dashboard/document-details")


def test_user_progress_for_admin_and_unknown(client):
    admin = client.get(f"{API}/user-progress/{ADMIN_ID}").json()
    assert admin["step"] is None
    assert admin["completedSteps"] == []

    assert client.get(f"{API}/user-progress/IOCL000001").status_code == 404


def test_calculate_age_handles_birthday_boundary():
    born = date(2000, 6, 15)

    assert calculate_age(born, today=date(2020, 6, 14)) == 19
    assert calculate_age(born, today=date(2020, 6, 15)) == 20
    assert calculate_age(date(2000, 2, 29), today=date(2021, 2, 28)) == 20
