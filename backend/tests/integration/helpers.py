"""Small request helpers shared by the API integration tests."""

DOCTOR_PAYLOAD = {
    "name": "Asha Rao",
    "age": 45,
    "gender": "F",
    "phone": "9876543210",
    "email": "asha.rao@clinic.example",
    "specialization": "CARDIOLOGY",
    "consultation_fee": 1000.0,
    "years_of_experience": 18,
}

PATIENT_PAYLOAD = {
    "name": "Ravi Kumar",
    "age": 34,
    "gender": "M",
    "phone": "9123456780",
    "blood_group": "O+",
    "allergies": ["penicillin"],
}


def register_doctor(client, **overrides):
    payload = dict(DOCTOR_PAYLOAD, **overrides)
    response = client.post("/api/doctors", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def register_patient(client, **overrides):
    payload = dict(PATIENT_PAYLOAD, **overrides)
    response = client.post("/api/patients", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def book_appointment(client, doctor_id, patient_id, scheduled_at="2030-01-15T10:00:00"):
    response = client.post(
        "/api/appointments",
        json={
            "doctor_id": doctor_id,
            "patient_id": patient_id,
            "scheduled_at": scheduled_at,
            "notes": "Annual check",
        },
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def seeded_appointment(client):
    doctor = register_doctor(client)
    patient = register_patient(client)
    return book_appointment(client, doctor["id"], patient["id"])
