# backend/models.py
import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import Engine
from sqlalchemy.orm import validates

db = SQLAlchemy()

MYSQL_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}

MEDIA_TYPES = ("image", "video")

# Portable types that emit the original MySQL column types
Year = db.SmallInteger().with_variant(mysql.YEAR(), "mysql")
TinyInt = db.SmallInteger().with_variant(mysql.TINYINT(), "mysql")
Timestamp = db.DateTime().with_variant(mysql.TIMESTAMP(), "mysql")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # InnoDB always enforces foreign keys, SQLite only when asked to
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


movie_genres = db.Table(
    "movie_genres",
    db.Column("movie_id", db.Integer, db.ForeignKey("movies.movie_id", ondelete="CASCADE"), primary_key=True),
    db.Column("genre_id", db.Integer, db.ForeignKey("genres.genre_id", ondelete="CASCADE"), primary_key=True),
    **MYSQL_TABLE_ARGS,
)

artist_skills = db.Table(
    "artist_skills",
    db.Column("artist_id", db.Integer, db.ForeignKey("artists.artist_id", ondelete="CASCADE"), primary_key=True),
    db.Column("skill_id", db.Integer, db.ForeignKey("skills.skill_id", ondelete="CASCADE"), primary_key=True),
    **MYSQL_TABLE_ARGS,
)


class User(db.Model):
    __tablename__ = "users"
    __table_args__ = MYSQL_TABLE_ARGS

    user_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True)
    created_at = db.Column(Timestamp, server_default=db.func.current_timestamp())

    reviews = db.relationship(
        "Review", back_populates="user", order_by="Review.review_id", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<User {self.user_id}:{self.username}>"


class Movie(db.Model):
    __tablename__ = "movies"
    __table_args__ = (
        db.Index("idx_movies_title", "title"),
        MYSQL_TABLE_ARGS,
    )

    movie_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    release_year = db.Column(Year)
    description = db.Column(db.Text)
    created_at = db.Column(Timestamp, server_default=db.func.current_timestamp())

    media = db.relationship(
        "Media", back_populates="movie", order_by="Media.media_id", cascade="all, delete-orphan", passive_deletes=True
    )
    reviews = db.relationship(
        "Review", back_populates="movie", order_by="Review.review_id", cascade="all, delete-orphan", passive_deletes=True
    )
    credits = db.relationship(
        "MovieArtistRole", back_populates="movie", cascade="all, delete-orphan", passive_deletes=True
    )
    genres = db.relationship("Genre", secondary=movie_genres, back_populates="movies", passive_deletes=True)

    def __repr__(self):
        return f"<Movie {self.movie_id}:{self.title} ({self.release_year})>"


class Media(db.Model):
    __tablename__ = "media"
    __table_args__ = (
        db.Index("idx_media_movie", "movie_id"),
        MYSQL_TABLE_ARGS,
    )

    media_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    movie_id = db.Column(db.Integer, db.ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False)
    media_type = db.Column(
        db.Enum(*MEDIA_TYPES, name="media_type", create_constraint=True),
        nullable=False,
    )
    url = db.Column(db.String(1000), nullable=False)
    caption = db.Column(db.String(500))
    added_at = db.Column(Timestamp, server_default=db.func.current_timestamp())

    movie = db.relationship("Movie", back_populates="media")

    def __repr__(self):
        return f"<Media {self.media_id}:{self.media_type} movie={self.movie_id}>"


class Genre(db.Model):
    __tablename__ = "genres"
    __table_args__ = MYSQL_TABLE_ARGS

    genre_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    movies = db.relationship("Movie", secondary=movie_genres, back_populates="genres", passive_deletes=True)

    def __repr__(self):
        return f"<Genre {self.name}>"


class Artist(db.Model):
    __tablename__ = "artists"
    __table_args__ = MYSQL_TABLE_ARGS

    artist_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    birth_date = db.Column(db.Date)
    bio = db.Column(db.Text)
    created_at = db.Column(Timestamp, server_default=db.func.current_timestamp())

    skills = db.relationship("Skill", secondary=artist_skills, back_populates="artists", passive_deletes=True)
    credits = db.relationship(
        "MovieArtistRole", back_populates="artist", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<Artist {self.artist_id}:{self.name}>"


class Skill(db.Model):
    __tablename__ = "skills"
    __table_args__ = MYSQL_TABLE_ARGS

    skill_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    artists = db.relationship("Artist", secondary=artist_skills, back_populates="skills", passive_deletes=True)

    def __repr__(self):
        return f"<Skill {self.name}>"


class Review(db.Model):
    __tablename__ = "reviews"
    __table_args__ = (
        db.CheckConstraint("rating BETWEEN 1 AND 10", name="ck_reviews_rating_range"),
        db.Index("idx_reviews_movie", "movie_id"),
        MYSQL_TABLE_ARGS,
    )

    review_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    movie_id = db.Column(db.Integer, db.ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    rating = db.Column(TinyInt, nullable=False)
    title = db.Column(db.String(255))
    body = db.Column(db.Text)
    created_at = db.Column(Timestamp, server_default=db.func.current_timestamp())

    movie = db.relationship("Movie", back_populates="reviews")
    user = db.relationship("User", back_populates="reviews")

    def __repr__(self):
        return f"<Review {self.review_id}: movie={self.movie_id} rating={self.rating}>"


class RoleType(db.Model):
    __tablename__ = "role_types"
    __table_args__ = MYSQL_TABLE_ARGS

    role_type_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(150), unique=True, nullable=False)

    credits = db.relationship(
        "MovieArtistRole", back_populates="role_type", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<RoleType {self.name}>"


class MovieArtistRole(db.Model):
    """One credit of an artist in a movie.

    The same artist may hold several credits in one movie, even under the
    same role type as long as the character differs. Credits without a
    character (directors, crew) store an empty ``character_name`` so the
    composite key behaves the same on every engine.
    """

    __tablename__ = "movie_artist_roles"
    __table_args__ = MYSQL_TABLE_ARGS

    movie_id = db.Column(db.Integer, db.ForeignKey("movies.movie_id", ondelete="CASCADE"), primary_key=True)
    artist_id = db.Column(db.Integer, db.ForeignKey("artists.artist_id", ondelete="CASCADE"), primary_key=True)
    role_type_id = db.Column(
        db.Integer, db.ForeignKey("role_types.role_type_id", ondelete="CASCADE"), primary_key=True
    )
    character_name = db.Column(db.String(255), primary_key=True, nullable=False, default="", server_default="")
    credit_order = db.Column(db.Integer)

    movie = db.relationship("Movie", back_populates="credits")
    artist = db.relationship("Artist", back_populates="credits")
    role_type = db.relationship("RoleType", back_populates="credits")

    @validates("character_name")
    def _normalize_character_name(self, key, value):
        return value or ""

    def __repr__(self):
        character = self.character_name or "-"
        return f"<MovieArtistRole movie={self.movie_id} artist={self.artist_id} role={self.role_type_id} {character}>"
