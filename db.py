import duckdb
import logging

import config

DB_FILE = config.DB_FILE

# -----------------------------
# Logging
# -----------------------------
def log_info(msg):
    logging.info(msg)
    print(msg)

def log_error(msg):
    logging.error(msg)
    print(msg)

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)


def rows_to_dicts(result):
    """Convert an executed DuckDB relation into a list of column->value dicts."""
    columns = [col[0] for col in result.description]
    return [dict(zip(columns, row)) for row in result.fetchall()]


def row_to_dict(result):
    rows = rows_to_dicts(result)
    return rows[0] if rows else None


SEQUENCES = [
    "accounts_id_seq",
    "categories_id_seq",
    "transactions_id_seq",
    "recurring_id_seq",
    "budgets_id_seq",
    "budget_periods_id_seq",
    "goals_id_seq",
    "goal_tx_id_seq",
    "transfers_id_seq",
    "investments_id_seq",
    "activity_logs_id_seq",
]

SYSTEM_CATEGORIES = [
    ("Salary", "💼", "#10b981"),
    ("Groceries", "🛒", "#f59e0b"),
    ("Rent", "🏠", "#6366f1"),
    ("Utilities", "💡", "#0ea5e9"),
    ("Transport", "🚗", "#8b5cf6"),
    ("Dining", "🍽️", "#ef4444"),
    ("Entertainment", "🎬", "#ec4899"),
    ("Subscriptions", "🔁", "#14b8a6"),
    ("Health", "🩺", "#22c55e"),
    ("Savings", "🐷", "#84cc16"),
    ("Other", "📦", "#64748b"),
]

# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        for seq in SEQUENCES:
            conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {seq} START 1")

        # Accounts table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY DEFAULT nextval('accounts_id_seq'),
            name VARCHAR NOT NULL,
            type VARCHAR NOT NULL CHECK(type IN ('checking','savings','credit','investment','cash')),
            currency VARCHAR NOT NULL DEFAULT 'USD',
            opening_balance DOUBLE NOT NULL DEFAULT 0,
            is_active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Accounts table ensured.")

        # Categories table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY DEFAULT nextval('categories_id_seq'),
            name VARCHAR NOT NULL,
            icon VARCHAR,
            color VARCHAR,
            parent_id INTEGER,
            is_system BOOLEAN DEFAULT FALSE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Categories table ensured.")

        # Transactions table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id INTEGER PRIMARY KEY DEFAULT nextval('transactions_id_seq'),
            account_id INTEGER NOT NULL,
            category_id INTEGER,
            transaction_date DATE NOT NULL,
            description TEXT NOT NULL,
            amount DOUBLE NOT NULL,
            type VARCHAR NOT NULL CHECK(type IN ('income','expense')),
            notes TEXT,
            is_recurring BOOLEAN DEFAULT FALSE,
            recurring_id INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Transactions table ensured.")

        # Recurring transactions table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS recurring_transactions (
            id INTEGER PRIMARY KEY DEFAULT nextval('recurring_id_seq'),
            account_id INTEGER NOT NULL,
            category_id INTEGER,
            name VARCHAR NOT NULL,
            amount DOUBLE NOT NULL,
            type VARCHAR NOT NULL CHECK(type IN ('income','expense')),
            frequency VARCHAR NOT NULL,
            start_date DATE NOT NULL,
            next_due_date DATE NOT NULL,
            end_date DATE,
            notes TEXT,
            is_active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Recurring transactions table ensured.")

        # Budgets and their periods
        conn.execute("""
        CREATE TABLE IF NOT EXISTS budgets (
            id INTEGER PRIMARY KEY DEFAULT nextval('budgets_id_seq'),
            name VARCHAR NOT NULL,
            category_id INTEGER,
            amount DOUBLE NOT NULL,
            period VARCHAR NOT NULL CHECK(period IN ('weekly','monthly','yearly')),
            alert_threshold INTEGER DEFAULT 80,
            start_date DATE NOT NULL,
            end_date DATE NOT NULL DEFAULT DATE '2099-12-31',
            is_active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS budget_periods (
            id INTEGER PRIMARY KEY DEFAULT nextval('budget_periods_id_seq'),
            budget_id INTEGER NOT NULL,
            period_start DATE NOT NULL,
            period_end DATE NOT NULL,
            budgeted_amount DOUBLE NOT NULL,
            is_current BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Budget tables ensured.")

        # Savings goals
        conn.execute("""
        CREATE TABLE IF NOT EXISTS savings_goals (
            id INTEGER PRIMARY KEY DEFAULT nextval('goals_id_seq'),
            name VARCHAR NOT NULL,
            target_amount DOUBLE NOT NULL,
            current_amount DOUBLE NOT NULL DEFAULT 0,
            target_date DATE,
            monthly_contribution DOUBLE,
            description TEXT,
            is_active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS savings_goal_transactions (
            id INTEGER PRIMARY KEY DEFAULT nextval('goal_tx_id_seq'),
            goal_id INTEGER NOT NULL,
            amount DOUBLE NOT NULL,
            transaction_type VARCHAR NOT NULL CHECK(transaction_type IN ('contribution','withdrawal')),
            description TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS savings_transfers (
            id INTEGER PRIMARY KEY DEFAULT nextval('transfers_id_seq'),
            amount DOUBLE NOT NULL,
            transfer_type VARCHAR NOT NULL CHECK(transfer_type IN ('to_savings','from_savings')),
            description TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Savings tables ensured.")

        # Investments
        conn.execute("""
        CREATE TABLE IF NOT EXISTS investments (
            id INTEGER PRIMARY KEY DEFAULT nextval('investments_id_seq'),
            name VARCHAR NOT NULL,
            symbol VARCHAR,
            investment_type VARCHAR NOT NULL,
            quantity DOUBLE NOT NULL DEFAULT 1,
            purchase_price DOUBLE NOT NULL,
            purchase_date DATE NOT NULL,
            current_price DOUBLE,
            last_updated TIMESTAMP,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Investments table ensured.")

        # Activity log and profile
        conn.execute("""
        CREATE TABLE IF NOT EXISTS activity_logs (
            id INTEGER PRIMARY KEY DEFAULT nextval('activity_logs_id_seq'),
            action_type VARCHAR NOT NULL,
            entity_type VARCHAR NOT NULL,
            entity_id INTEGER,
            description TEXT NOT NULL,
            amount DOUBLE,
            metadata TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS profile (
            id INTEGER PRIMARY KEY,
            full_name VARCHAR,
            email VARCHAR,
            currency VARCHAR DEFAULT 'USD',
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Activity log and profile tables ensured.")

        # Indexes
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_account_date ON transactions(account_id, transaction_date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_category ON transactions(category_id);")
        log_info("Indexes created/ensured.")

        # Default main account
        conn.execute("""
        INSERT INTO accounts (name, type, currency)
        SELECT 'Main Account', 'checking', ?
        WHERE NOT EXISTS (SELECT 1 FROM accounts WHERE type = 'checking');
        """, (config.CURRENCY,))
        log_info("Default main account ensured.")

        # System categories
        existing = conn.execute("SELECT COUNT(*) FROM categories WHERE is_system").fetchone()[0]
        if existing == 0:
            for name, icon, color in SYSTEM_CATEGORIES:
                conn.execute(
                    "INSERT INTO categories (name, icon, color, is_system) VALUES (?, ?, ?, TRUE)",
                    (name, icon, color)
                )
        log_info("System categories ensured.")

        conn.execute("""
        INSERT INTO profile (id, currency)
        SELECT 1, ?
        WHERE NOT EXISTS (SELECT 1 FROM profile WHERE id = 1);
        """, (config.CURRENCY,))
        log_info("Profile row ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
