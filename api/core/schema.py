"""
Schema DDL and sample data.

`create_schema` is idempotent (IF NOT EXISTS) and is what startup runs when
DB_INIT_SCHEMA is on. `drop_schema` is only reachable through the admin
routes.

Delete policy:
- project deleted  -> its tasks and memberships are deleted (CASCADE)
- assignee deleted -> tasks.assignee_id / projects.owner_id become NULL,
                      memberships are deleted
"""

from __future__ import annotations

import logging
from datetime import date

from .db import Database

logger = logging.getLogger(__name__)

RESOURCE_TABLES = ("assignees", "projects", "tasks", "project_assignees")

CREATE_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
      id SERIAL PRIMARY KEY,
      email VARCHAR(320) NOT NULL,
      password_hash TEXT NOT NULL,
      is_active BOOLEAN NOT NULL DEFAULT TRUE,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      CONSTRAINT uq_users_email UNIQUE (email)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS assignees (
      id SERIAL PRIMARY KEY,
      name VARCHAR(255) NOT NULL,
      email VARCHAR(255) NOT NULL,
      role VARCHAR(50) NOT NULL DEFAULT 'member',
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      CONSTRAINT uq_assignees_email UNIQUE (email)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
      id SERIAL PRIMARY KEY,
      title VARCHAR(255) NOT NULL,
      description TEXT,
      status VARCHAR(50) NOT NULL DEFAULT 'Active',
      priority VARCHAR(50) NOT NULL DEFAULT 'Medium',
      owner_id INTEGER,
      start_date DATE,
      end_date DATE,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      CONSTRAINT fk_projects_owner FOREIGN KEY (owner_id)
        REFERENCES assignees (id) ON DELETE SET NULL,
      CONSTRAINT ck_projects_date_range
        CHECK (start_date IS NULL OR end_date IS NULL OR end_date >= start_date)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
      id SERIAL PRIMARY KEY,
      title VARCHAR(255) NOT NULL,
      description TEXT,
      status VARCHAR(50) NOT NULL DEFAULT 'Todo',
      priority VARCHAR(50) NOT NULL DEFAULT 'Medium',
      due_date DATE,
      project_id INTEGER,
      assignee_id INTEGER,
      completed BOOLEAN NOT NULL DEFAULT FALSE,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      CONSTRAINT fk_tasks_project FOREIGN KEY (project_id)
        REFERENCES projects (id) ON DELETE CASCADE,
      CONSTRAINT fk_tasks_assignee FOREIGN KEY (assignee_id)
        REFERENCES assignees (id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_assignees (
      id SERIAL PRIMARY KEY,
      project_id INTEGER NOT NULL,
      assignee_id INTEGER NOT NULL,
      role_in_project VARCHAR(100) NOT NULL DEFAULT 'Team Member',
      assigned_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      CONSTRAINT fk_project_assignees_project FOREIGN KEY (project_id)
        REFERENCES projects (id) ON DELETE CASCADE,
      CONSTRAINT fk_project_assignees_assignee FOREIGN KEY (assignee_id)
        REFERENCES assignees (id) ON DELETE CASCADE,
      CONSTRAINT uq_project_assignees_pair UNIQUE (project_id, assignee_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_tasks_project_id ON tasks (project_id)",
    "CREATE INDEX IF NOT EXISTS ix_tasks_assignee_id ON tasks (assignee_id)",
    "CREATE INDEX IF NOT EXISTS ix_projects_owner_id ON projects (owner_id)",
    "CREATE INDEX IF NOT EXISTS ix_project_assignees_assignee_id ON project_assignees (assignee_id)",
)

DROP_STATEMENT = "DROP TABLE IF EXISTS project_assignees, tasks, projects, assignees, users CASCADE"

SAMPLE_ASSIGNEES = (
    ("John Doe", "john@example.com", "admin"),
    ("Jane Smith", "jane@example.com", "manager"),
    ("Bob Johnson", "bob@example.com", "member"),
)

# owner is an index into SAMPLE_ASSIGNEES
SAMPLE_PROJECTS = (
    ("Website Redesign", "Complete overhaul of company website", "Active", "High", 0, "2024-01-01", "2024-03-31"),
    ("Mobile App Development", "Create new mobile application", "Active", "Medium", 1, "2024-02-01", "2024-06-30"),
    ("Database Migration", "Migrate from MySQL to PostgreSQL", "Planning", "High", 0, "2024-03-01", "2024-04-30"),
)

# (title, description, status, priority, project idx, assignee idx, due, completed)
SAMPLE_TASKS = (
    ("Design Homepage", "Create new homepage design", "In Progress", "High", 0, 1, "2024-01-15", False),
    ("Setup Database", "Configure PostgreSQL database", "Done", "High", 0, 0, "2024-01-10", True),
    ("Create API Endpoints", "Build REST API for mobile app", "Todo", "Medium", 1, 2, "2024-02-20", False),
    ("User Authentication", "Implement login/logout functionality", "In Progress", "High", 1, 1, "2024-02-25", False),
)

# (project idx, assignee idx, role)
SAMPLE_MEMBERSHIPS = (
    (0, 0, "Project Lead"),
    (0, 1, "Frontend Developer"),
    (1, 1, "Backend Developer"),
    (1, 2, "Mobile Developer"),
    (2, 0, "Database Administrator"),
    (2, 2, "Developer"),
)


async def create_schema(db: Database) -> None:
    async with db.transaction() as tx:
        for statement in CREATE_STATEMENTS:
            await tx.execute(statement)
    logger.info("schema_ready tables=%s", ",".join(("users",) + RESOURCE_TABLES))


async def drop_schema(db: Database) -> None:
    await db.execute(DROP_STATEMENT)
    logger.warning("schema_dropped")


async def table_counts(db: Database) -> dict[str, int]:
    row = await db.fetch_one(
        """
        SELECT
          (SELECT count(*) FROM assignees) AS assignees,
          (SELECT count(*) FROM projects) AS projects,
          (SELECT count(*) FROM tasks) AS tasks,
          (SELECT count(*) FROM project_assignees) AS project_assignees
        """
    )
    return {table: int((row or {}).get(table, 0)) for table in RESOURCE_TABLES}


def _as_date(value: str) -> date:
    return date.fromisoformat(value)


async def seed_sample_data(db: Database) -> bool:
    """
    Insert the sample data set, but only into an empty database.

    Returns True when rows were inserted.
    """
    counts = await table_counts(db)
    if any(counts.values()):
        logger.info("seed_skipped reason=not_empty counts=%s", counts)
        return False

    async with db.transaction() as tx:
        assignee_ids: list[int] = []
        for name, email, role in SAMPLE_ASSIGNEES:
            assignee_ids.append(
                await tx.fetch_value(
                    "INSERT INTO assignees (name, email, role) VALUES ($1, $2, $3) RETURNING id",
                    name,
                    email,
                    role,
                )
            )

        project_ids: list[int] = []
        for title, description, status, priority, owner, start, end in SAMPLE_PROJECTS:
            project_ids.append(
                await tx.fetch_value(
                    """
                    INSERT INTO projects (title, description, status, priority, owner_id, start_date, end_date)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    RETURNING id
                    """,
                    title,
                    description,
                    status,
                    priority,
                    assignee_ids[owner],
                    _as_date(start),
                    _as_date(end),
                )
            )

        for title, description, status, priority, project, assignee, due, completed in SAMPLE_TASKS:
            await tx.execute(
                """
                INSERT INTO tasks (title, description, status, priority, project_id, assignee_id, due_date, completed)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                """,
                title,
                description,
                status,
                priority,
                project_ids[project],
                assignee_ids[assignee],
                _as_date(due),
                completed,
            )

        for project, assignee, role in SAMPLE_MEMBERSHIPS:
            await tx.execute(
                """
                INSERT INTO project_assignees (project_id, assignee_id, role_in_project)
                VALUES ($1, $2, $3)
                ON CONFLICT (project_id, assignee_id) DO NOTHING
                """,
                project_ids[project],
                assignee_ids[assignee],
                role,
            )

    logger.info(
        "seed_complete assignees=%s projects=%s tasks=%s memberships=%s",
        len(SAMPLE_ASSIGNEES),
        len(SAMPLE_PROJECTS),
        len(SAMPLE_TASKS),
        len(SAMPLE_MEMBERSHIPS),
    )
    return True
