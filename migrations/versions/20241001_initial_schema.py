"""create users, studies, comments and notices tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "initial_20241001"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("GUEST", "USER", "ADMIN")
FREQUENCIES = ("once", "twice", "more")
NOTIFICATION_TYPES = ("NEW_COMMENT", "NEW_REPLY", "NEW_APPLY", "ACCEPTED", "REJECTED")


def upgrade():
    user_role_enum = sa.Enum(*USER_ROLES, name="user_role_enum")
    frequency_enum = sa.Enum(*FREQUENCIES, name="study_frequency_enum")
    notification_type_enum = sa.Enum(*NOTIFICATION_TYPES, name="notification_type_enum")

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", user_role_enum, nullable=False, server_default="GUEST"),
        sa.Column("is_logout", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("user_name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("dept", sa.String(length=100), nullable=False),
        sa.Column("grade", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("bio", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("user_about", sa.Text(), nullable=False),
        sa.Column("show_dept", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_grade", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("on_break", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("link1", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("link2", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("link3", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("categories", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("image", sa.String(length=255), nullable=False, server_default=""),
    )

    op.create_table(
        "categories",
        sa.Column("code", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("main", sa.String(length=50), nullable=False),
        sa.Column("sub", sa.String(length=50), nullable=True),
    )

    op.create_table(
        "studies",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("study_about", sa.Text(), nullable=False),
        sa.Column("weekday", sa.String(length=64), nullable=False),
        sa.Column("frequency", frequency_enum, nullable=False),
        sa.Column("location", sa.String(length=128), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("members_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("vacancy", sa.Integer(), nullable=False),
        sa.Column("is_open", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("category_code", sa.Integer(), sa.ForeignKey("categories.code"), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bookmark_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("host_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_studies_created_at", "studies", ["created_at"])
    op.create_index("ix_studies_is_open", "studies", ["is_open"])
    op.create_index("ix_studies_category_code", "studies", ["category_code"])
    op.create_index("ix_studies_host_id", "studies", ["host_id"])

    op.create_table(
        "bookmarks",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("study_id", sa.String(length=36), sa.ForeignKey("studies.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "study_users",
        sa.Column("study_id", sa.String(length=36), sa.ForeignKey("studies.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("temp_bio", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "comments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("study_id", sa.String(length=36), sa.ForeignKey("studies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("parent_id", sa.String(length=36), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_comments_study_id", "comments", ["study_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])

    op.create_table(
        "metoos",
        sa.Column("comment_id", sa.String(length=36), sa.ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("study_id", sa.String(length=36), sa.ForeignKey("studies.id", ondelete="CASCADE"), nullable=True),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("about", sa.String(length=255), nullable=False),
        sa.Column("type", notification_type_enum, nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "notices",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("about", sa.Text(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("host_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_notices_created_at", "notices", ["created_at"])


def downgrade():
    op.drop_index("ix_notices_created_at", table_name="notices")
    op.drop_table("notices")
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_table("metoos")
    op.drop_index("ix_comments_parent_id", table_name="comments")
    op.drop_index("ix_comments_study_id", table_name="comments")
    op.drop_table("comments")
    op.drop_table("study_users")
    op.drop_table("bookmarks")
    op.drop_index("ix_studies_host_id", table_name="studies")
    op.drop_index("ix_studies_category_code", table_name="studies")
    op.drop_index("ix_studies_is_open", table_name="studies")
    op.drop_index("ix_studies_created_at", table_name="studies")
    op.drop_table("studies")
    op.drop_table("categories")
    op.drop_table("user_profiles")
    op.drop_table("users")

    bind = op.get_bind()
    sa.Enum(name="notification_type_enum").drop(bind, checkfirst=True)
    sa.Enum(name="study_frequency_enum").drop(bind, checkfirst=True)
    sa.Enum(name="user_role_enum").drop(bind, checkfirst=True)
