# backend-server/app/db/models.py
from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, Date, Text, Boolean, JSON,
    CheckConstraint, UniqueConstraint, Index, func,
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

PROJECT_TYPES = ("video", "research", "guide", "podcast", "custom")
SESSION_TYPES = ("focus", "break", "meeting")
SENDERS = ("user", "assistant")

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    email = Column(String(200), nullable=False)
    name = Column(String(120), nullable=False)
    avatar = Column(String(500), nullable=True)
    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan")

class Project(Base):
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")
    progress = Column(Integer, nullable=False, default=0)
    deadline = Column(Date, nullable=True)
    ai_assistance_enabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    color_code = Column(String(50), nullable=False)
    icon = Column(String(100), nullable=True)
    files = Column(Integer, nullable=False, default=0)
    time_logged = Column(Integer, nullable=False, default=0)  # minutes
    __table_args__ = (
        CheckConstraint("type IN ('video', 'research', 'guide', 'podcast', 'custom')"),
        CheckConstraint("progress >= 0 AND progress <= 100"),
    )
    owner = relationship("User", back_populates="projects")

class ProjectTemplate(Base):
    __tablename__ = "project_templates"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    sections = Column(JSON, nullable=False)

class WorkSession(Base):
    __tablename__ = "work_sessions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    duration = Column(Integer, nullable=True)  # minutes, set when the session ends
    type = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    is_flow_state = Column(Boolean, nullable=False, default=False)
    __table_args__ = (
        CheckConstraint("type IN ('focus', 'break', 'meeting')"),
        # At most one active (unended) session per user
        Index(
            "uq_work_sessions_one_active_per_user", "user_id", unique=True,
            sqlite_where=end_time.is_(None), postgresql_where=end_time.is_(None),
        ),
    )

class Recommendation(Base):
    __tablename__ = "recommendations"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(100), nullable=False)
    action_text = Column(String(100), nullable=False)
    secondary_action_text = Column(String(100), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

class AssistantMessage(Base):
    __tablename__ = "assistant_messages"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    sender = Column(String(20), nullable=False)
    provider = Column(String(20), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    __table_args__ = ( CheckConstraint("sender IN ('user', 'assistant')"), )

class DailyAnalytics(Base):
    __tablename__ = "daily_analytics"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    focus_time = Column(Integer, nullable=False, default=0)  # minutes
    flow_states = Column(Integer, nullable=False, default=0)
    productivity = Column(Integer, nullable=False, default=0)  # 0-100
    __table_args__ = ( UniqueConstraint("user_id", "date", name="uq_daily_analytics_user_date"), )
