"""SQLAlchemy table definitions for the Q&A site.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False),
    Column("tags", postgresql.ARRAY(String(20)), nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("author_username", String(30), nullable=False),  # Denormalized from token
    # Vote ledger: {"<voter uuid>": "up" | "down"}; score is its cached sum
    Column("vote_history", JSONB, nullable=False, server_default="{}"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="0"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column("is_closed", Boolean, nullable=False, server_default="false"),
    Column(
        "accepted_answer_id",
        UUID,
        ForeignKey("answers.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("views >= 0", name="check_question_views_non_negative"),
    CheckConstraint("answer_count >= 0", name="check_question_answer_count_non_negative"),
)

Index("idx_questions_created_at", questions_table.c.created_at.desc())
Index("idx_questions_score", questions_table.c.score.desc())
Index("idx_questions_tags", questions_table.c.tags, postgresql_using="gin")
Index("idx_questions_author_id", questions_table.c.author_id)

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content", Text, nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("author_username", String(30), nullable=False),
    Column("vote_history", JSONB, nullable=False, server_default="{}"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="0"),
    Column("is_accepted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_author_id", answers_table.c.author_id)
# At most one accepted answer per question
Index(
    "uq_answers_one_accepted_per_question",
    answers_table.c.question_id,
    unique=True,
    postgresql_where=text("is_accepted"),
)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("recipient_id", UUID, nullable=False),
    Column("sender_id", UUID, nullable=False),
    Column(
        "kind",
        postgresql.ENUM(
            "answer", "vote", "accept", name="notification_kind", create_type=False
        ),
        nullable=False,
    ),
    Column("title", String(200), nullable=False),
    Column("message", String(500), nullable=False),
    Column("link", Text, nullable=False),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "question_id", UUID, ForeignKey("questions.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "answer_id", UUID, ForeignKey("answers.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_recipient_created",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at.desc(),
)
Index(
    "idx_notifications_recipient_unread",
    notifications_table.c.recipient_id,
    postgresql_where=text("NOT read"),
)
