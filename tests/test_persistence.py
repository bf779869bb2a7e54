import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from bodega.fastapi.core.exceptions import PersistenceError
from bodega.fastapi.crud.base import persistence_guard
from bodega.fastapi.crud.time_record import TimeRecordCRUD, delete_time_records
from bodega.fastapi.models.employee import Area, Employee
from bodega.fastapi.models.time_record import RecordType, TimeRecord

GENERIC_FAILURE = PersistenceError().message

ENTRADA = {
    "cedula": "12345",
    "objetos_personales": ["NO-INGRESA-NADA"],
    "tarea": "CAJEROS",
}


def disk_error(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@pytest.fixture
def missing_records_table(db_engine):
    with db_engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE time_records")


def test_failed_read_on_entrada_returns_generic_error(client, ana, missing_records_table):
    response = client.post("/api/v1/time/entrada", json=ENTRADA)

    assert response.status_code == 503
    assert response.json()["detail"] == GENERIC_FAILURE


def test_failed_read_on_listings_returns_generic_error(client, ana, missing_records_table):
    for path in ("/api/v1/time/records", "/api/v1/time/board", "/api/v1/time/export"):
        response = client.get(path)
        assert response.status_code == 503, path
        assert response.json()["detail"] == GENERIC_FAILURE

    # Tables that are still there keep working
    assert client.get("/api/v1/employees").json()["total"] == 1


def test_failed_read_on_metrics_returns_generic_error(admin_client, missing_records_table):
    response = admin_client.get("/api/v1/metrics")

    assert response.status_code == 503
    assert response.json()["detail"] == GENERIC_FAILURE


def test_failed_commit_rolls_back_and_recovers(client, monkeypatch):
    monkeypatch.setattr(Session, "commit", disk_error)

    failed = client.post("/api/v1/employees", json={"cedula": "12345", "nombre": "ANA", "area": "EXTERNO"})

    assert failed.status_code == 503
    assert failed.json()["detail"] == GENERIC_FAILURE

    monkeypatch.undo()
    assert client.get("/api/v1/employees").json()["total"] == 0

    retried = client.post("/api/v1/employees", json={"cedula": "12345", "nombre": "ANA", "area": "EXTERNO"})
    assert retried.status_code == 201


def test_failed_commit_on_entrada(client, ana, monkeypatch):
    monkeypatch.setattr(Session, "commit", disk_error)

    response = client.post("/api/v1/time/entrada", json=ENTRADA)

    assert response.status_code == 503
    monkeypatch.undo()
    assert client.get("/api/v1/time/records").json()["total"] == 0


def test_persistence_guard_rolls_back_session(db_session):
    with pytest.raises(PersistenceError):
        with persistence_guard(db_session, "insert employee"):
            db_session.add(Employee(cedula="12345", nombre="ANA", area=Area.EXTERNO))
            db_session.flush()
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    assert db_session.query(Employee).count() == 0

    db_session.add(Employee(cedula="67890", nombre="BRUNO", area=Area.EXTERNO))
    db_session.commit()
    assert db_session.query(Employee).count() == 1


def test_delete_time_records_only_removes_given_ids(db_session):
    employee = Employee(cedula="12345", nombre="ANA", area=Area.PUNTO_DE_VENTA)
    db_session.add(employee)
    db_session.commit()

    crud = TimeRecordCRUD(db_session)
    exported = crud.insert_time_record(employee.id, RecordType.ENTRADA, ["NO-INGRESA-NADA"], "CAJEROS")
    newer = crud.insert_time_record(employee.id, RecordType.SALIDA, ["NO-INGRESA-NADA"], "CAJEROS")
    newer_id = newer.id

    assert delete_time_records(db_session, [exported.id]) == 1
    assert delete_time_records(db_session, []) == 0

    db_session.expire_all()
    assert [r.id for r in db_session.query(TimeRecord).all()] == [newer_id]


def test_board_loads_records_in_one_query(client, db_engine):
    for cedula, nombre in [("100", "ANDREA"), ("200", "BRUNO"), ("300", "CARLA")]:
        client.post("/api/v1/employees", json={"cedula": cedula, "nombre": nombre, "area": "EXTERNO"})
        client.post("/api/v1/time/entrada", json={**ENTRADA, "cedula": cedula})

    statements = []

    def collect(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db_engine, "before_cursor_execute", collect)
    try:
        board = client.get("/api/v1/time/board").json()
    finally:
        event.remove(db_engine, "before_cursor_execute", collect)

    assert len(board["employees"]) == 3
    assert len([s for s in statements if "FROM time_records" in s]) == 1
