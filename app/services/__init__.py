# app/services/__init__.py
"""
Use-cases of the HR backend, one subpackage per area: auth, users,
attendance, leave, performance and reports.

Services receive a session factory and open a UnitOfWork per call:

    class LeaveTypeService:
        def __init__(self, session_factory: Callable[[], Session]) -> None:
            self._session_factory = session_factory

        def list_types(self, active_only: bool = True):
            with UnitOfWork(self._session_factory) as uow:
                ...

They raise errors from app.services.common.errors and never touch HTTP.
"""
