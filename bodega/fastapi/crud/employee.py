"""
Employee CRUD operations.

This module provides database operations for the warehouse roster:
registration, lookup by cedula, listing and deletion.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bodega.fastapi.core.exceptions import ConflictError, NotFoundError, ValidationError
from bodega.fastapi.core.utils import is_valid_cedula, normalize_cedula, normalize_nombre
from bodega.fastapi.crud.base import persistence_guard
from bodega.fastapi.models.employee import Area, Employee
from bodega.fastapi.schemas.employee import EmployeeCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = "Todos los campos son obligatorios"
DUPLICATE_CEDULA = "Ya existe un empleado con esta cédula"
EMPLOYEE_NOT_FOUND = "No se encontró el empleado"


class EmployeeCRUD:
    """CRUD operations for Employee model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_employee(self, employee_data: EmployeeCreate) -> Employee:
        """
        Register a new employee.

        Cedula and name are normalized (stripped and upper-cased) before
        they are checked and stored.

        Args:
            employee_data: Registration data with cedula, nombre and area

        Returns:
            Created Employee instance

        Raises:
            ValidationError: If a field is empty, the cedula is malformed or
                the area is unknown
            ConflictError: If the cedula is already registered
        """
        cedula = normalize_cedula(employee_data.cedula)
        nombre = normalize_nombre(employee_data.nombre)
        area_value = (employee_data.area or "").strip().upper()

        if not cedula or not nombre or not area_value:
            raise ValidationError(REQUIRED_FIELDS)

        if not is_valid_cedula(cedula):
            raise ValidationError(
                "Cédula inválida: use de 3 a 20 caracteres entre letras, números y guiones"
            )

        try:
            area = Area(area_value)
        except ValueError:
            raise ValidationError(f"Área no reconocida: {area_value}")

        return self.insert_employee(cedula, nombre, area)

    def insert_employee(self, cedula: str, nombre: str, area: Area) -> Employee:
        """
        Insert an employee row.

        Raises:
            ConflictError: If the cedula already exists; the existing row is
                left untouched
            PersistenceError: If the database fails
        """
        if self.get_employee_by_cedula(cedula):
            raise ConflictError(DUPLICATE_CEDULA)

        db_employee = Employee(cedula=cedula, nombre=nombre, area=area)

        with persistence_guard(self.db, "insert employee"):
            try:
                self.db.add(db_employee)
                self.db.commit()
            except IntegrityError:
                # Lost a race with another registration of the same cedula
                self.db.rollback()
                raise ConflictError(DUPLICATE_CEDULA)
            self.db.refresh(db_employee)

        logger.info("Registered employee %s (%s)", db_employee.cedula, db_employee.area.value)
        return db_employee

    def get_employee(self, employee_id: UUID) -> Optional[Employee]:
        """Get employee by ID."""
        with persistence_guard(self.db, "get employee"):
            return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def get_employee_by_cedula(self, cedula: str) -> Optional[Employee]:
        """
        Get employee by cedula, case-insensitively.

        Args:
            cedula: Cedula as typed by the operator

        Returns:
            Employee instance or None if not found
        """
        normalized = normalize_cedula(cedula)
        if not normalized:
            return None
        with persistence_guard(self.db, "get employee by cedula"):
            return self.db.query(Employee).filter(Employee.cedula == normalized).first()

    def get_employees(self, with_records: bool = False) -> List[Employee]:
        """
        Get the whole roster ordered by name.

        Args:
            with_records: Load every employee's time records in one extra query
        """
        query = self.db.query(Employee)
        if with_records:
            query = query.options(selectinload(Employee.time_records))
        with persistence_guard(self.db, "list employees"):
            return query.order_by(Employee.nombre, Employee.cedula).all()

    def delete_employee(self, employee_id: UUID) -> bool:
        """
        Delete employee by ID together with their time records.

        Returns:
            True if deleted, False if not found
        """
        db_employee = self.get_employee(employee_id)
        if not db_employee:
            return False

        cedula = db_employee.cedula
        with persistence_guard(self.db, "delete employee"):
            self.db.delete(db_employee)
            self.db.commit()

        logger.info("Deleted employee %s", cedula)
        return True

    def delete_employee_by_cedula(self, cedula: str) -> str:
        """
        Delete the employee with the given cedula.

        Returns:
            The normalized cedula of the deleted employee

        Raises:
            ValidationError: If the cedula is empty
            NotFoundError: If no employee has that cedula
        """
        if not normalize_cedula(cedula):
            raise ValidationError("Ingrese la cédula del empleado a borrar")

        db_employee = self.get_employee_by_cedula(cedula)
        if not db_employee:
            raise NotFoundError(EMPLOYEE_NOT_FOUND)

        deleted_cedula = db_employee.cedula
        self.delete_employee(db_employee.id)
        return deleted_cedula


# Convenience functions
def create_employee(db: Session, employee_data: EmployeeCreate) -> Employee:
    """Register a new employee."""
    return EmployeeCRUD(db).create_employee(employee_data)


def get_employee_by_cedula(db: Session, cedula: str) -> Optional[Employee]:
    """Get employee by cedula."""
    return EmployeeCRUD(db).get_employee_by_cedula(cedula)


def get_employees(db: Session, with_records: bool = False) -> List[Employee]:
    """Get the roster ordered by name."""
    return EmployeeCRUD(db).get_employees(with_records)


def delete_employee_by_cedula(db: Session, cedula: str) -> str:
    """Delete employee by cedula."""
    return EmployeeCRUD(db).delete_employee_by_cedula(cedula)
