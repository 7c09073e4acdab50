"""Schedule repository - Database operations for weekly availability and blocked intervals"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import BlockedInterval, User, WeeklyAvailability


class ScheduleRepository:
    """Repository for a maid's weekly schedule and blocked intervals"""

    @staticmethod
    def get_maid(db: Session, maid_id: int) -> Optional[User]:
        """Get a user by ID only if they are a maid"""
        return db.query(User).filter(User.id == maid_id, User.role == "maid").first()

    @staticmethod
    def get_weekly_schedule(db: Session, maid_id: int) -> list[WeeklyAvailability]:
        return (
            db.query(WeeklyAvailability)
            .filter(WeeklyAvailability.maid_id == maid_id)
            .order_by(WeeklyAvailability.day_of_week)
            .all()
        )

    @staticmethod
    def has_weekly_schedule(db: Session, maid_id: int) -> bool:
        return (
            db.query(WeeklyAvailability.id).filter(WeeklyAvailability.maid_id == maid_id).first()
            is not None
        )

    @staticmethod
    def get_day_schedule(db: Session, maid_id: int, day_of_week: int) -> Optional[WeeklyAvailability]:
        return (
            db.query(WeeklyAvailability)
            .filter(
                WeeklyAvailability.maid_id == maid_id,
                WeeklyAvailability.day_of_week == day_of_week,
            )
            .first()
        )

    @staticmethod
    def replace_weekly_schedule(
        db: Session, maid_id: int, rows: list[dict]
    ) -> list[WeeklyAvailability]:
        """Replace all weekly rows for a maid in one transaction"""
        db.query(WeeklyAvailability).filter(WeeklyAvailability.maid_id == maid_id).delete(
            synchronize_session=False
        )
        # Flush the delete before inserting so the (maid, weekday) constraint holds
        db.flush()
        for row in rows:
            db.add(WeeklyAvailability(maid_id=maid_id, **row))
        db.commit()
        return ScheduleRepository.get_weekly_schedule(db, maid_id)

    @staticmethod
    def get_blocked_intervals(db: Session, maid_id: int) -> list[BlockedInterval]:
        return (
            db.query(BlockedInterval)
            .filter(BlockedInterval.maid_id == maid_id)
            .order_by(BlockedInterval.date, BlockedInterval.start_time)
            .all()
        )

    @staticmethod
    def get_blocks_on_date(db: Session, maid_id: int, day: date) -> list[BlockedInterval]:
        return (
            db.query(BlockedInterval)
            .filter(BlockedInterval.maid_id == maid_id, BlockedInterval.date == day)
            .order_by(BlockedInterval.start_time)
            .all()
        )

    @staticmethod
    def find_block(
        db: Session, maid_id: int, day: date, start_time: str, end_time: str
    ) -> Optional[BlockedInterval]:
        """Find a block with the exact same (date, start, end) triple"""
        return (
            db.query(BlockedInterval)
            .filter(
                BlockedInterval.maid_id == maid_id,
                BlockedInterval.date == day,
                BlockedInterval.start_time == start_time,
                BlockedInterval.end_time == end_time,
            )
            .first()
        )

    @staticmethod
    def create_block(db: Session, maid_id: int, **block_data) -> BlockedInterval:
        block = BlockedInterval(maid_id=maid_id, **block_data)
        db.add(block)
        db.commit()
        db.refresh(block)
        return block

    @staticmethod
    def get_block_by_id(db: Session, block_id: int, maid_id: int) -> Optional[BlockedInterval]:
        return (
            db.query(BlockedInterval)
            .filter(BlockedInterval.id == block_id, BlockedInterval.maid_id == maid_id)
            .first()
        )

    @staticmethod
    def delete_block(db: Session, block: BlockedInterval) -> None:
        db.delete(block)
        db.commit()
