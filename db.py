import os
import sqlite3
import logging

logger = logging.getLogger("gameverse.db")

DB_NAME = os.environ.get("GAMEVERSE_DB", "game_store.db")

# (title, description, price, image_url)
SAMPLE_GAMES = [
    ("Elden Ring", "Open-world action RPG in the Lands Between.", "69.99", "elden_ring.png"),
    ("Hollow Knight", "Hand-drawn metroidvania in a ruined insect kingdom.", "14.99", "hollow_knight.png"),
    ("God of War Ragnarök", "Kratos and Atreus face the end of the Norse realms.", "55.00", "god_of_war.png"),
    ("Hades", "Rogue-like dungeon crawler out of the Underworld.", "24.99", "hades.png"),
    ("Celeste", "Precision platformer about climbing a mountain.", "19.99", "celeste.png"),
]


def get_connection(db_name=None):
    """Return a connection to the SQLite database."""
    conn = sqlite3.connect(db_name or DB_NAME)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_name=None):
    """Create tables if they do not exist."""
    conn = get_connection(db_name)
    cur = conn.cursor()

    # Games table
    # price is TEXT so decimal prices are stored exactly
    cur.execute("""
        CREATE TABLE IF NOT EXISTS games (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            price TEXT NOT NULL,
            image_url TEXT
        )
    """)

    conn.commit()
    conn.close()


def seed_sample_games(db_name=None):
    """
    Insert the sample catalog if the games table is empty.
    """
    conn = get_connection(db_name)
    cur = conn.cursor()
    cur.execute("SELECT COUNT(*) FROM games")
    count = cur.fetchone()[0]

    if count == 0:
        cur.executemany(
            "INSERT INTO games (title, description, price, image_url) VALUES (?, ?, ?, ?)",
            SAMPLE_GAMES,
        )
        conn.commit()
        logger.info("Seeded %d sample games", len(SAMPLE_GAMES))

    conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing database...")
    init_db()
    seed_sample_games()
    logger.info("Database setup complete.")
