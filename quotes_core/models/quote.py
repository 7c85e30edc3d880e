from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String, Text
from quotes_core.database import Base


class Quote(Base):
    __tablename__ = "quotes"
    __table_args__ = (
        CheckConstraint("displayed_times >= 0", name="ck_quotes_displayed_times_non_negative"),
    )

    # Assigned at seed time from the record's position in the dataset
    id = Column(Integer, primary_key=True, autoincrement=False)
    quote = Column(Text, nullable=False)
    author = Column(Text, nullable=False, default="Unknown")
    category = Column(String(32), nullable=False, index=True)
    displayed_times = Column(Integer, nullable=False, default=0)
    bookmarked = Column(Boolean, nullable=False, default=False)
