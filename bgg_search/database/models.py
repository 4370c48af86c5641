import logging
import os
import sqlite3

logger = logging.getLogger(__name__)


def create_database(db_path="bgg_games.db"):
    """Create the database and the games table caching BGG catalog data."""
    
    # Ensure database directory exists (only if path contains directory)
    db_dir = os.path.dirname(str(db_path))
    if db_dir:  # Only create directory if there is one
        os.makedirs(db_dir, exist_ok=True)
    
    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.cursor()
        
        # bgg_id is the natural key; UNIQUE keeps concurrent first-time inserts from duplicating a game
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS games (
                id TEXT PRIMARY KEY,
                bgg_id INTEGER UNIQUE NOT NULL,
                name TEXT NOT NULL,
                description TEXT,
                image_url TEXT,
                min_players INTEGER,
                max_players INTEGER,
                playing_time INTEGER,
                year_published INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        
        conn.commit()
    finally:
        conn.close()
    logger.info(f"Database ready at {db_path}")
