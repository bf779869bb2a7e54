from fastapi import FastAPI

from bodega.fastapi.api.v1.endpoints import auth, employee, general, metrics, time_record


def setup_routers(app: FastAPI):
    # Public liveness check and catalogs
    app.include_router(general.router, prefix="/api/v1", tags=["general"])

    # Operator authentication
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["authentication"])

    # Roster management
    app.include_router(employee.router, prefix="/api/v1/employees", tags=["employees"])

    # Arrivals, departures, history and export
    app.include_router(time_record.router, prefix="/api/v1/time", tags=["time-records"])

    # Admin-only metrics panel
    app.include_router(metrics.router, prefix="/api/v1/metrics", tags=["metrics"])
