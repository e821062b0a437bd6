"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Transactions: negative amounts are expenses, positive amounts income
CREATE TABLE IF NOT EXISTS transactions (
    id              VARCHAR(32) PRIMARY KEY,
    description     TEXT NOT NULL,
    category        VARCHAR(50) NOT NULL,
    amount          NUMERIC(12,2) NOT NULL CHECK (amount <> 0),
    date            TIMESTAMP NOT NULL,
    created_at      TIMESTAMP NOT NULL DEFAULT NOW()
);

-- Budgets: category allocations are stored as a JSON array
CREATE TABLE IF NOT EXISTS budgets (
    id              VARCHAR(32) PRIMARY KEY,
    limit_amount    NUMERIC(12,2) NOT NULL CHECK (limit_amount > 0),
    categories      JSONB NOT NULL DEFAULT '[]',
    month           TIMESTAMP NOT NULL,
    is_active       BOOLEAN NOT NULL DEFAULT FALSE,
    created_at      TIMESTAMP NOT NULL DEFAULT NOW()
);

-- Recurring expenses: bills and subscriptions
CREATE TABLE IF NOT EXISTS recurring_expenses (
    id              VARCHAR(32) PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    category        VARCHAR(50) NOT NULL,
    amount          NUMERIC(12,2) NOT NULL CHECK (amount > 0),
    frequency       VARCHAR(20) NOT NULL CHECK (frequency IN ('weekly', 'monthly', 'yearly')),
    next_due_date   DATE NOT NULL,
    status          VARCHAR(10) NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'inactive')),
    created_at      TIMESTAMP NOT NULL DEFAULT NOW()
);

-- Savings goals
CREATE TABLE IF NOT EXISTS goals (
    id              VARCHAR(32) PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    target_amount   NUMERIC(12,2) NOT NULL CHECK (target_amount > 0),
    current_amount  NUMERIC(12,2) NOT NULL DEFAULT 0,
    deadline        DATE NOT NULL,
    is_current      BOOLEAN NOT NULL DEFAULT FALSE,
    created_at      TIMESTAMP NOT NULL DEFAULT NOW()
);

-- Settings: a single row keyed by id = 1
CREATE TABLE IF NOT EXISTS settings (
    id              INT PRIMARY KEY CHECK (id = 1),
    theme           VARCHAR(10) NOT NULL DEFAULT 'light',
    currency        VARCHAR(5) NOT NULL DEFAULT 'USD',
    first_name      VARCHAR(100),
    last_name       VARCHAR(100),
    email           VARCHAR(255)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date);
CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category);
CREATE INDEX IF NOT EXISTS idx_recurring_due ON recurring_expenses(next_due_date) WHERE status = 'active';
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("✅ Database schema created successfully.")
