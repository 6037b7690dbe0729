from models import Movie, User


def test_init_db_with_seed(runner):
    result = runner.invoke(args=["init-db", "--seed"])
    assert result.exit_code == 0, result.output
    assert "Initialized the catalog database." in result.output
    assert "users: 2" in result.output
    assert "movie_artist_roles: 3" in result.output
    assert Movie.query.count() == 2


def test_init_db_resets(seeded, runner):
    result = runner.invoke(args=["init-db"])
    assert result.exit_code == 0, result.output
    assert User.query.count() == 0


def test_seed_twice_fails(runner):
    assert runner.invoke(args=["seed"]).exit_code == 0
    result = runner.invoke(args=["seed"])
    assert result.exit_code == 1
    assert "already has data" in result.output


def test_show_ddl(runner):
    result = runner.invoke(args=["show-ddl"])
    assert result.exit_code == 0, result.output
    assert "CREATE TABLE users" in result.output
    assert "ENGINE=InnoDB" in result.output

    result = runner.invoke(args=["show-ddl", "--dialect", "sqlite"])
    assert result.exit_code == 0, result.output
    assert "ENGINE=InnoDB" not in result.output
    assert "CREATE INDEX idx_media_movie ON media (movie_id)" in result.output
