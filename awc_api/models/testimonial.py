from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, CheckConstraint
from datetime import datetime, UTC

from awc_api.db import Base


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    testimony = Column(Text, nullable=False)
    anonymous = Column(Boolean, nullable=False, default=False)
    # pending -> approved only; approved_at is set exactly when approved is true
    approved = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))
    approved_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "(NOT approved AND approved_at IS NULL) OR (approved AND approved_at IS NOT NULL)",
            name="ck_testimonials_approved_at",
        ),
    )
