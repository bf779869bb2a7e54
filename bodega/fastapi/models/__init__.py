from bodega.fastapi.models.employee import Area, Employee
from bodega.fastapi.models.operator import Operator
from bodega.fastapi.models.time_record import RecordType, TimeRecord

__all__ = ["Area", "Employee", "Operator", "RecordType", "TimeRecord"]
