# backend/seed.py
"""Sample catalog rows.

Parent rows carry their primary keys and the link rows point at them, so the
fixtures are inserted in dependency order into empty tables only.
"""
from datetime import date

from flask import current_app
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from models import (
    Artist,
    Genre,
    Media,
    Movie,
    MovieArtistRole,
    Review,
    RoleType,
    Skill,
    User,
    artist_skills,
    db,
    movie_genres,
)


class SeedError(Exception):
    pass


USERS = [
    {"user_id": 1, "username": "alice", "email": "alice@example.com"},
    {"user_id": 2, "username": "bob", "email": "bob@example.com"},
]

MOVIES = [
    {"movie_id": 1, "title": "The Great Adventure", "release_year": 2021, "description": "An epic journey."},
    {"movie_id": 2, "title": "Space Mystery", "release_year": 2022, "description": "Sci-fi thriller."},
]

MEDIA = [
    {"movie_id": 1, "media_type": "image", "url": "https://example.com/great_adventure/poster.jpg", "caption": "Poster"},
    {"movie_id": 1, "media_type": "video", "url": "https://example.com/great_adventure/trailer.mp4", "caption": "Trailer"},
    {"movie_id": 2, "media_type": "image", "url": "https://example.com/space_mystery/poster.jpg", "caption": "Poster"},
]

GENRES = [{"genre_id": i, "name": name} for i, name in enumerate(("Action", "Adventure", "Sci-Fi", "Mystery"), start=1)]

MOVIE_GENRES = [
    {"movie_id": 1, "genre_id": 1},  # The Great Adventure: Action
    {"movie_id": 1, "genre_id": 2},  # Adventure
    {"movie_id": 2, "genre_id": 3},  # Space Mystery: Sci-Fi
    {"movie_id": 2, "genre_id": 4},  # Mystery
]

REVIEWS = [
    {"movie_id": 1, "user_id": 1, "rating": 9, "title": "Loved it", "body": "Great pacing and visuals"},
    {"movie_id": 1, "user_id": 2, "rating": 8, "title": "Good", "body": "Entertaining family movie"},
    {"movie_id": 2, "user_id": 2, "rating": 7, "title": "Intriguing", "body": "Nice concept but pacing issues"},
]

ARTISTS = [
    {"artist_id": 1, "name": "John Star", "birth_date": date(1985, 4, 12)},
    {"artist_id": 2, "name": "Priya Kumar", "birth_date": date(1990, 9, 1)},
]

SKILLS = [{"skill_id": i, "name": name} for i, name in enumerate(("Acting", "Singing", "Stunts", "Directing"), start=1)]

ARTIST_SKILLS = [
    {"artist_id": 1, "skill_id": 1},  # John: Acting
    {"artist_id": 1, "skill_id": 3},  # Stunts
    {"artist_id": 2, "skill_id": 1},  # Priya: Acting
    {"artist_id": 2, "skill_id": 2},  # Singing
]

ROLE_TYPES = [{"role_type_id": i, "name": name} for i, name in enumerate(("Lead", "Supporting", "Director"), start=1)]

MOVIE_ARTIST_ROLES = [
    {"movie_id": 1, "artist_id": 1, "role_type_id": 1, "character_name": "Captain Blaze", "credit_order": 1},
    # John also directs; no character
    {"movie_id": 1, "artist_id": 1, "role_type_id": 3, "character_name": "", "credit_order": 99},
    {"movie_id": 1, "artist_id": 2, "role_type_id": 2, "character_name": "Rhea", "credit_order": 2},
]

# Parents before children
SEED_PLAN = [
    (User.__table__, USERS),
    (Movie.__table__, MOVIES),
    (Media.__table__, MEDIA),
    (Genre.__table__, GENRES),
    (movie_genres, MOVIE_GENRES),
    (Review.__table__, REVIEWS),
    (Artist.__table__, ARTISTS),
    (Skill.__table__, SKILLS),
    (artist_skills, ARTIST_SKILLS),
    (RoleType.__table__, ROLE_TYPES),
    (MovieArtistRole.__table__, MOVIE_ARTIST_ROLES),
]


def seed_database():
    """Insert the sample rows and return ``{table name: rows inserted}``."""
    # Fixture rows point at parents by id, so every seeded table must start empty
    filled = [table.name for table, _ in SEED_PLAN if db.session.execute(select(table).limit(1)).first()]
    if filled:
        raise SeedError(f"Catalog already has data in {', '.join(filled)}; reset the database before seeding")

    counts = {}
    try:
        for table, rows in SEED_PLAN:
            db.session.execute(insert(table), rows)
            counts[table.name] = len(rows)
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise SeedError(f"Seeding {table.name} failed: {exc.orig}") from exc
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Seeded catalog: %s", ", ".join(f"{name}={count}" for name, count in counts.items())
    )
    return counts
