"""
Time Tracking Repository
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.attendance import TimeTracking
from app.repositories.base.base_repository import BaseRepository


class TimeTrackingRepository(BaseRepository[TimeTracking]):
    def __init__(self, session: Session):
        super().__init__(TimeTracking, session)

    def find_for_user(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[TimeTracking]:
        """Entries whose start falls in the inclusive UTC date range."""
        stmt = select(TimeTracking).where(TimeTracking.user_id == user_id)
        if start_date:
            stmt = stmt.where(
                TimeTracking.start_time >= datetime.combine(start_date, time.min, tzinfo=timezone.utc)
            )
        if end_date:
            stmt = stmt.where(
                TimeTracking.start_time
                < datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
            )
        stmt = stmt.order_by(TimeTracking.start_time.desc())
        return list(self.session.scalars(stmt).all())
