from bodega.fastapi.schemas.operator import (
    OperatorBase,
    OperatorCreate,
    OperatorRead,
    OperatorLogin,
    TokenResponse
)
from bodega.fastapi.schemas.employee import (
    EmployeeCreate,
    EmployeeRead,
    EmployeeStatus,
    EmployeeListResponse,
    EmployeeDeleteResponse
)
from bodega.fastapi.schemas.time_record import (
    EntradaCreate,
    SalidaCreate,
    TimeRecordRead,
    TimeRecordWithEmployee,
    MovementResponse,
    TimeRecordListResponse,
    BoardEntry,
    BoardResponse,
    ClearRecordsResponse
)
from bodega.fastapi.schemas.metrics import (
    EmployeeMetricRead,
    MetricsSummaryRead,
    MetricsResponse
)
