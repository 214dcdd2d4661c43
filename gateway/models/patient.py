from sqlalchemy import Column, Integer, String, Date
from gateway.database import Base


class Patient(Base):
    __tablename__ = "patient"
    __table_args__ = {"mysql_engine": "InnoDB"}

    patientId = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    dateOfBirth = Column(Date, nullable=False)
