# backend/catalog.py
"""Create, read, update and delete helpers for the catalog tables.

Integrity is left to the schema: unique keys, foreign keys, the rating CHECK
and ON DELETE CASCADE. Violations reported by the database are re-raised as
:class:`CatalogError` subclasses after the session is rolled back.
"""
from contextlib import contextmanager

from flask import current_app
from sqlalchemy import delete, insert
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

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


class CatalogError(Exception):
    pass


class DuplicateEntryError(CatalogError):
    pass


class MissingReferenceError(CatalogError):
    pass


class ConstraintViolationError(CatalogError):
    pass


# Substrings of SQLite and MySQL error messages, lower-cased
_DUPLICATE_MARKERS = ("unique constraint failed", "duplicate entry")
_MISSING_REFERENCE_MARKERS = ("foreign key constraint",)
_CHECK_MARKERS = ("check constraint", "not null constraint failed", "cannot be null")

REVIEW_FIELDS = ("rating", "title", "body")


def _classify(exc):
    if isinstance(exc, DataError):
        # MySQL strict mode: value outside the ENUM or the column range
        return ConstraintViolationError
    message = str(exc.orig).lower()
    if any(marker in message for marker in _DUPLICATE_MARKERS):
        return DuplicateEntryError
    if any(marker in message for marker in _MISSING_REFERENCE_MARKERS):
        return MissingReferenceError
    if any(marker in message for marker in _CHECK_MARKERS):
        return ConstraintViolationError
    return None


@contextmanager
def _writing():
    try:
        yield
        db.session.commit()
    except (DataError, IntegrityError, OperationalError) as exc:
        db.session.rollback()
        error_cls = _classify(exc)
        if error_cls is None:
            raise
        current_app.logger.warning("%s: %s", error_cls.__name__, exc.orig)
        raise error_cls(str(exc.orig)) from exc
    except Exception:
        db.session.rollback()
        raise


def _add(row):
    with _writing():
        db.session.add(row)
    return row


def _link(table, **keys):
    with _writing():
        db.session.execute(insert(table).values(**keys))


def _delete(model, column, value):
    with _writing():
        result = db.session.execute(delete(model).where(column == value))
    return result.rowcount > 0


# ---------------- CREATE ----------------
def create_user(username, email=None):
    return _add(User(username=username, email=email))


def create_movie(title, release_year=None, description=None):
    return _add(Movie(title=title, release_year=release_year, description=description))


def add_media(movie_id, media_type, url, caption=None):
    return _add(Media(movie_id=movie_id, media_type=media_type, url=url, caption=caption))


def create_genre(name):
    return _add(Genre(name=name))


def create_skill(name):
    return _add(Skill(name=name))


def create_role_type(name):
    return _add(RoleType(name=name))


def create_artist(name, birth_date=None, bio=None):
    return _add(Artist(name=name, birth_date=birth_date, bio=bio))


def add_review(movie_id, user_id, rating, title=None, body=None):
    return _add(Review(movie_id=movie_id, user_id=user_id, rating=rating, title=title, body=body))


def tag_movie_genre(movie_id, genre_id):
    _link(movie_genres, movie_id=movie_id, genre_id=genre_id)


def add_artist_skill(artist_id, skill_id):
    _link(artist_skills, artist_id=artist_id, skill_id=skill_id)


def credit_artist(movie_id, artist_id, role_type_id, character_name=None, credit_order=None):
    """Credit an artist in a movie. ``character_name=None`` is stored as ``''``."""
    _link(
        MovieArtistRole.__table__,
        movie_id=movie_id,
        artist_id=artist_id,
        role_type_id=role_type_id,
        character_name=character_name or "",
        credit_order=credit_order,
    )
    return db.session.get(MovieArtistRole, (movie_id, artist_id, role_type_id, character_name or ""))


# ---------------- READ ----------------
def search_movies(title):
    """Movies whose title starts with ``title``, served by idx_movies_title."""
    return Movie.query.filter(Movie.title.like(f"{title}%")).order_by(Movie.title, Movie.movie_id).all()


def reviews_for_movie(movie_id):
    return Review.query.filter_by(movie_id=movie_id).order_by(Review.review_id).all()


def media_for_movie(movie_id):
    return Media.query.filter_by(movie_id=movie_id).order_by(Media.media_id).all()


def credits_for_movie(movie_id):
    # NULL credit orders go last on both SQLite and MySQL
    return (
        MovieArtistRole.query
        .filter_by(movie_id=movie_id)
        .order_by(MovieArtistRole.credit_order.is_(None), MovieArtistRole.credit_order, MovieArtistRole.artist_id)
        .all()
    )


# ---------------- UPDATE ----------------
def update_review(review_id, **fields):
    unknown = set(fields) - set(REVIEW_FIELDS)
    if unknown:
        raise TypeError(f"Cannot update review field(s): {', '.join(sorted(unknown))}")

    review = db.session.get(Review, review_id)
    if review is None:
        return None

    with _writing():
        for name, value in fields.items():
            setattr(review, name, value)
    return review


# ---------------- DELETE ----------------
def delete_movie(movie_id):
    return _delete(Movie, Movie.movie_id, movie_id)


def delete_user(user_id):
    return _delete(User, User.user_id, user_id)


def delete_artist(artist_id):
    return _delete(Artist, Artist.artist_id, artist_id)


def delete_genre(genre_id):
    return _delete(Genre, Genre.genre_id, genre_id)


def delete_skill(skill_id):
    return _delete(Skill, Skill.skill_id, skill_id)


def delete_role_type(role_type_id):
    return _delete(RoleType, RoleType.role_type_id, role_type_id)
