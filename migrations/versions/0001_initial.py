# migrations/versions/0001_initial.py
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("uid", sa.String(128), nullable=False),
        sa.Column("email", sa.String(160), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(160), nullable=False, server_default="User"),
        sa.Column("photo_url", sa.String(500), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="STUDENT"),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("emergency_contact", sa.String(160), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("uid", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("age_group", sa.String(80), nullable=True),
        sa.Column("type", sa.String(16), nullable=True),
        sa.Column("sessions", sa.Integer(), nullable=True),
        sa.Column("price", sa.Integer(), nullable=True),
        sa.Column("time_slot", sa.String(120), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("is_open", sa.Boolean(), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        sa.Column("instructor_name", sa.String(160), nullable=True),
        sa.Column("pool_location", sa.String(160), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_courses"),
    )

    op.create_table(
        "enrollments",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("student_id", sa.String(16), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("course_id", sa.String(64), nullable=False),
        sa.Column("student_name", sa.String(160), nullable=False),
        sa.Column("gender", sa.String(20), nullable=False, server_default=""),
        sa.Column("age", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("weight", sa.String(20), nullable=False, server_default=""),
        sa.Column("height", sa.String(20), nullable=False, server_default=""),
        sa.Column("disease", sa.Text(), nullable=True),
        sa.Column("adhd_condition", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("school", sa.String(160), nullable=False, server_default=""),
        sa.Column("phone", sa.String(30), nullable=False, server_default=""),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("slip_url", sa.String(500), nullable=False),
        sa.Column("payment_status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("evaluation", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("review_rating", sa.Integer(), nullable=True),
        sa.Column("review_comment", sa.Text(), nullable=True),
        sa.Column("review_created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_enrollments"),
    )
    op.create_index("ix_enrollments_student_id", "enrollments", ["student_id"])
    op.create_index("ix_enrollments_user_id", "enrollments", ["user_id"])
    op.create_index("ix_enrollments_course_id", "enrollments", ["course_id"])
    op.create_index("ix_enrollments_payment_status", "enrollments", ["payment_status"])

    # presença: uma linha por check-in, sem unique por dia
    op.create_table(
        "enrollment_attendance",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("enrollment_id", sa.String(32), nullable=False),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("checkin_day", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_enrollment_attendance"),
        sa.ForeignKeyConstraint(
            ["enrollment_id"], ["enrollments.id"],
            name="fk_enrollment_attendance_enrollment_id_enrollments",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_attendance_enrollment_day", "enrollment_attendance", ["enrollment_id", "checkin_day"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="SYSTEM"),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_notifications"),
    )
    op.create_index("ix_notifications_user_read", "notifications", ["user_id", "read"])

    op.create_table(
        "leave_requests",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("student_name", sa.String(160), nullable=False, server_default=""),
        sa.Column("enrollment_id", sa.String(32), nullable=False),
        sa.Column("course_name", sa.String(200), nullable=False, server_default="Unknown"),
        sa.Column("leave_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_leave_requests"),
    )
    op.create_index("ix_leave_requests_user_id", "leave_requests", ["user_id"])
    op.create_index("ix_leave_requests_enrollment_id", "leave_requests", ["enrollment_id"])

    op.create_table(
        "counters",
        sa.Column("key", sa.String(16), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("key", name="pk_counters"),
    )

def downgrade():
    op.drop_table("counters")
    op.drop_index("ix_leave_requests_enrollment_id", table_name="leave_requests")
    op.drop_index("ix_leave_requests_user_id", table_name="leave_requests")
    op.drop_table("leave_requests")
    op.drop_index("ix_notifications_user_read", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_attendance_enrollment_day", table_name="enrollment_attendance")
    op.drop_table("enrollment_attendance")
    for col in ("payment_status", "course_id", "user_id", "student_id"):
        op.drop_index(f"ix_enrollments_{col}", table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_table("courses")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
