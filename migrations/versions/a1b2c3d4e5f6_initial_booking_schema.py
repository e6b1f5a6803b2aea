"""initial booking schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "courts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("surface", sa.String(length=80), nullable=True),
        sa.Column("lock_version", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("phone_number", sa.String(length=10), nullable=False),
        sa.Column("whatsapp_number", sa.String(length=10), nullable=True),
        sa.Column("address", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("is_gst", sa.Boolean(), nullable=False),
        sa.Column("gst", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("mode_of_payment", sa.String(length=10), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_phone_number"), ["phone_number"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("court_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("is_multi_day", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.String(length=300), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("is_gst", sa.Boolean(), nullable=False),
        sa.Column("gst", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("mode_of_payment", sa.String(length=10), nullable=False),
        sa.Column("is_renewal", sa.Boolean(), nullable=False),
        sa.Column("parent_booking_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("cancelled_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["court_id"], ["courts.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["parent_booking_id"], ["bookings.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("bookings", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_bookings_court_id"), ["court_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_bookings_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_bookings_start_time"), ["start_time"], unique=False)

    op.create_table(
        "slots",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("court_id", sa.Integer(), nullable=False),
        sa.Column("booking_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("is_booked", sa.Boolean(), nullable=False),
        sa.Column("is_multi_day", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.String(length=300), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("is_gst", sa.Boolean(), nullable=False),
        sa.Column("gst", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("mode_of_payment", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["court_id"], ["courts.id"]),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("slots", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_slots_court_id"), ["court_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_slots_booking_id"), ["booking_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_slots_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_slots_start_date"), ["start_date"], unique=False)
        batch_op.create_index(batch_op.f("ix_slots_start_time"), ["start_time"], unique=False)
        batch_op.create_index(
            "uq_slot_booked_window",
            ["court_id", "start_time", "end_time"],
            unique=True,
            sqlite_where=sa.text("is_booked = 1"),
            postgresql_where=sa.text("is_booked"),
        )

    op.create_table(
        "billings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("booking_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("court_id", sa.Integer(), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("is_gst", sa.Boolean(), nullable=False),
        sa.Column("gst", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("mode_of_payment", sa.String(length=10), nullable=False),
        sa.Column("user_info", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("billings", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_billings_booking_id"), ["booking_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_billings_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_billings_court_id"), ["court_id"], unique=False)

    op.create_table(
        "deleted_users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user", sa.JSON(), nullable=False),
        sa.Column("billings", sa.JSON(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("deleted_users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_deleted_users_deleted_at"), ["deleted_at"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(length=80), nullable=False),
        sa.Column("entity", sa.String(length=80), nullable=True),
        sa.Column("entity_id", sa.String(length=80), nullable=True),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("metadata_json", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("audit_logs", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_audit_logs_action"), ["action"], unique=False)
        batch_op.create_index(batch_op.f("ix_audit_logs_timestamp"), ["timestamp"], unique=False)


def downgrade():
    with op.batch_alter_table("audit_logs", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_audit_logs_timestamp"))
        batch_op.drop_index(batch_op.f("ix_audit_logs_action"))
    op.drop_table("audit_logs")

    with op.batch_alter_table("deleted_users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_deleted_users_deleted_at"))
    op.drop_table("deleted_users")

    with op.batch_alter_table("billings", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_billings_court_id"))
        batch_op.drop_index(batch_op.f("ix_billings_user_id"))
        batch_op.drop_index(batch_op.f("ix_billings_booking_id"))
    op.drop_table("billings")

    with op.batch_alter_table("slots", schema=None) as batch_op:
        batch_op.drop_index("uq_slot_booked_window")
        batch_op.drop_index(batch_op.f("ix_slots_start_time"))
        batch_op.drop_index(batch_op.f("ix_slots_start_date"))
        batch_op.drop_index(batch_op.f("ix_slots_user_id"))
        batch_op.drop_index(batch_op.f("ix_slots_booking_id"))
        batch_op.drop_index(batch_op.f("ix_slots_court_id"))
    op.drop_table("slots")

    with op.batch_alter_table("bookings", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_bookings_start_time"))
        batch_op.drop_index(batch_op.f("ix_bookings_user_id"))
        batch_op.drop_index(batch_op.f("ix_bookings_court_id"))
    op.drop_table("bookings")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_phone_number"))
    op.drop_table("users")

    op.drop_table("courts")
