import pytest


def test_register_employee_normalizes_fields(client):
    response = client.post("/api/v1/employees", json={
        "cedula": "  ab-123 ",
        "nombre": "  ana   maría ",
        "area": "administracion",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["cedula"] == "AB-123"
    assert data["nombre"] == "ANA MARÍA"
    assert data["area"] == "ADMINISTRACION"


@pytest.mark.parametrize("payload", [
    {"cedula": "", "nombre": "ANA", "area": "EXTERNO"},
    {"cedula": "12345", "nombre": "   ", "area": "EXTERNO"},
    {"cedula": "12345", "nombre": "ANA"},
])
def test_register_employee_requires_all_fields(client, payload):
    response = client.post("/api/v1/employees", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Todos los campos son obligatorios"


@pytest.mark.parametrize("cedula", ["12", "12 345", "12.345"])
def test_register_employee_rejects_malformed_cedula(client, cedula):
    response = client.post("/api/v1/employees", json={"cedula": cedula, "nombre": "ANA", "area": "EXTERNO"})

    assert response.status_code == 400


def test_register_employee_rejects_unknown_area(client):
    response = client.post("/api/v1/employees", json={"cedula": "12345", "nombre": "ANA", "area": "COCINA"})

    assert response.status_code == 400


def test_duplicate_cedula_conflict_keeps_original(client, ana):
    response = client.post("/api/v1/employees", json={
        "cedula": "12345",
        "nombre": "OTRA PERSONA",
        "area": "EXTERNO",
    })

    assert response.status_code == 409
    assert response.json()["detail"] == "Ya existe un empleado con esta cédula"

    existing = client.get("/api/v1/employees/12345").json()
    assert existing["id"] == ana["id"]
    assert existing["nombre"] == "ANA"
    assert existing["area"] == "PUNTO_DE_VENTA"


def test_lookup_is_case_insensitive(client):
    client.post("/api/v1/employees", json={"cedula": "ab-123", "nombre": "LUIS", "area": "EXTERNO"})

    response = client.get("/api/v1/employees/Ab-123")

    assert response.status_code == 200
    data = response.json()
    assert data["cedula"] == "AB-123"
    assert data["estado_hoy"] == "NO_RECORD"
    assert data["puede_registrar_entrada"] is True
    assert data["puede_generar_salida"] is False


def test_lookup_unknown_employee(client):
    response = client.get("/api/v1/employees/99999")

    assert response.status_code == 404


def test_list_employees_ordered_by_name(client):
    for cedula, nombre in [("300", "ZOILA"), ("100", "BRUNO"), ("200", "ANDREA")]:
        client.post("/api/v1/employees", json={"cedula": cedula, "nombre": nombre, "area": "EXTERNO"})

    data = client.get("/api/v1/employees").json()

    assert data["total"] == 3
    assert [e["nombre"] for e in data["employees"]] == ["ANDREA", "BRUNO", "ZOILA"]


def test_delete_employee_removes_records(client, ana):
    client.post("/api/v1/time/entrada", json={
        "cedula": "12345",
        "objetos_personales": ["NO-INGRESA-NADA"],
        "tarea": "CAJEROS",
    })

    response = client.delete("/api/v1/employees/12345")

    assert response.status_code == 200
    assert response.json()["cedula"] == "12345"
    assert client.get("/api/v1/employees/12345").status_code == 404
    assert client.get("/api/v1/time/records").json()["total"] == 0


def test_delete_unknown_employee(client):
    response = client.delete("/api/v1/employees/99999")

    assert response.status_code == 404
    assert response.json()["detail"] == "No se encontró el empleado"


def test_roster_requires_authentication(unauthenticated_client):
    response = unauthenticated_client.get("/api/v1/employees")

    assert response.status_code in (401, 403)


def test_padded_cedula_is_normalized_before_length_check(client):
    padded = "   12345" + " " * 15

    response = client.post("/api/v1/employees", json={"cedula": padded, "nombre": "ANA", "area": "EXTERNO"})

    assert response.status_code == 201
    assert response.json()["cedula"] == "12345"
    assert client.get("/api/v1/employees/12345").status_code == 200


def test_overlong_cedula_gets_roster_message(client):
    response = client.post("/api/v1/employees", json={"cedula": "A" * 21, "nombre": "ANA", "area": "EXTERNO"})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Cédula inválida")
