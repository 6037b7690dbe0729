import pytest
from sqlalchemy import inspect, insert, text
from sqlalchemy.exc import IntegrityError

from models import Movie, MovieArtistRole, db, movie_genres
from schema import render_ddl, reset_database

TABLES = {
    "users",
    "movies",
    "media",
    "genres",
    "movie_genres",
    "reviews",
    "artists",
    "skills",
    "artist_skills",
    "role_types",
    "movie_artist_roles",
}


def test_all_tables_created(app):
    assert set(inspect(db.engine).get_table_names()) == TABLES


@pytest.mark.parametrize(
    "table, index",
    [
        ("movies", "idx_movies_title"),
        ("reviews", "idx_reviews_movie"),
        ("media", "idx_media_movie"),
    ],
)
def test_secondary_indexes(app, table, index):
    assert index in {idx["name"] for idx in inspect(db.engine).get_indexes(table)}


def test_sqlite_enforces_foreign_keys(app):
    assert db.session.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_composite_primary_keys(app):
    inspector = inspect(db.engine)
    assert inspector.get_pk_constraint("movie_genres")["constrained_columns"] == ["movie_id", "genre_id"]
    assert inspector.get_pk_constraint("artist_skills")["constrained_columns"] == ["artist_id", "skill_id"]
    assert inspector.get_pk_constraint("movie_artist_roles")["constrained_columns"] == [
        "movie_id",
        "artist_id",
        "role_type_id",
        "character_name",
    ]


def test_movie_genre_link_needs_existing_movie(app):
    with pytest.raises(IntegrityError):
        db.session.execute(insert(movie_genres).values(movie_id=999, genre_id=1))
    db.session.rollback()


def test_character_name_none_means_no_character():
    assert MovieArtistRole(character_name=None).character_name == ""


def test_reset_database_empties_catalog(seeded):
    reset_database()
    assert Movie.query.count() == 0
    assert set(inspect(db.engine).get_table_names()) == TABLES


def test_mysql_ddl(app):
    ddl = "\n".join(render_ddl("mysql"))
    assert "CREATE TABLE movie_artist_roles" in ddl
    assert "ENGINE=InnoDB" in ddl
    assert "utf8mb4_unicode_ci" in ddl
    assert "ENUM('image','video')" in ddl
    assert "CONSTRAINT ck_reviews_rating_range CHECK (rating BETWEEN 1 AND 10)" in ddl
    assert "ON DELETE CASCADE" in ddl
    assert "CREATE INDEX idx_movies_title ON movies (title)" in ddl
    assert "release_year YEAR" in ddl
    assert "rating TINYINT NOT NULL" in ddl
    assert "created_at TIMESTAMP" in ddl
    assert "added_at TIMESTAMP" in ddl
    assert "DATETIME" not in ddl
    assert "SMALLINT" not in ddl


def test_ddl_lists_parents_first(app):
    statements = render_ddl("sqlite")
    position = {
        name: next(i for i, stmt in enumerate(statements) if stmt.startswith(f"CREATE TABLE {name} "))
        for name in ("movies", "users", "reviews", "artists", "role_types", "movie_artist_roles")
    }
    assert position["movies"] < position["reviews"]
    assert position["users"] < position["reviews"]
    assert position["artists"] < position["movie_artist_roles"]
    assert position["role_types"] < position["movie_artist_roles"]
    assert all(stmt.startswith("CREATE INDEX") for stmt in statements[len(TABLES):])


def test_unknown_dialect(app):
    with pytest.raises(ValueError, match="Unsupported dialect"):
        render_ddl("oracle")
