"""
Tests pour SQLModelMovieRepository.

Base SQLite en memoire (fixtures conftest). Verifie :
- l'insertion en masse (IDs attribues, atomicite)
- la suppression par provenance, liens compris
- le remplacement des associations (ecrasement, idempotence, doublons)
- la pagination et les comptages
"""

from datetime import date

import pytest

from src.core.entities.catalog import Character, Movie, Provenance
from src.core.errors import PersistenceError


def _external_movie(ref: str, title: str = "A New Hope") -> Movie:
    return Movie(
        title=title,
        release_date=date(1977, 5, 25),
        provenance=Provenance.EXTERNAL,
        external_ref=ref,
    )


@pytest.fixture
def characters(character_repo) -> list[Character]:
    """Trois personnages internes persistes."""
    return character_repo.bulk_insert(
        [Character(name="Luke"), Character(name="Leia"), Character(name="Han")]
    )


class TestBulkInsert:
    """Tests pour bulk_insert."""

    def test_assigns_ids_in_order(self, movie_repo):
        created = movie_repo.bulk_insert(
            [_external_movie("f1", "A New Hope"), _external_movie("f2", "Empire")]
        )

        assert [movie.title for movie in created] == ["A New Hope", "Empire"]
        assert all(movie.id is not None for movie in created)
        assert created[0].id < created[1].id
        assert created[0].provenance == Provenance.EXTERNAL

    def test_empty_sequence(self, movie_repo):
        assert movie_repo.bulk_insert([]) == []
        assert movie_repo.count() == 0

    def test_failure_keeps_nothing(self, movie_repo):
        """Un external_ref duplique annule tout le lot."""
        with pytest.raises(PersistenceError):
            movie_repo.bulk_insert(
                [_external_movie("f1"), _external_movie("f2"), _external_movie("f1")]
            )

        assert movie_repo.count() == 0

    def test_repository_usable_after_failure(self, movie_repo):
        with pytest.raises(PersistenceError):
            movie_repo.bulk_insert([_external_movie("f1"), _external_movie("f1")])

        created = movie_repo.bulk_insert([_external_movie("f1")])
        assert len(created) == 1


class TestQueries:
    """Tests pour get_by_id, list_all et count."""

    def test_get_by_id_includes_characters(self, movie_repo, characters):
        [movie] = movie_repo.bulk_insert([_external_movie("f1")])
        movie_repo.replace_associations(movie.id, [characters[1].id, characters[0].id])

        found = movie_repo.get_by_id(movie.id)

        assert found.title == "A New Hope"
        assert found.release_date == date(1977, 5, 25)
        assert found.character_ids == (characters[0].id, characters[1].id)

    def test_get_by_id_missing(self, movie_repo):
        assert movie_repo.get_by_id(404) is None

    def test_list_all_filters_and_paginates(self, movie_repo):
        movie_repo.bulk_insert([Movie(title="Fan Edit")])
        movie_repo.bulk_insert(
            [_external_movie(f"f{i}", f"Episode {i}") for i in range(1, 6)]
        )

        assert movie_repo.count() == 6
        assert movie_repo.count(Provenance.INTERNAL) == 1
        assert movie_repo.count(Provenance.EXTERNAL) == 5

        page = movie_repo.list_all(Provenance.EXTERNAL, offset=1, limit=2)
        assert [movie.title for movie in page] == ["Episode 2", "Episode 3"]

        internal = movie_repo.list_all(Provenance.INTERNAL)
        assert [movie.title for movie in internal] == ["Fan Edit"]


class TestDeleteByProvenance:
    """Tests pour delete_by_provenance."""

    def test_no_matching_rows_is_a_noop(self, movie_repo):
        movie_repo.bulk_insert([Movie(title="Fan Edit")])

        assert movie_repo.delete_by_provenance(Provenance.EXTERNAL) == 0
        assert movie_repo.count() == 1

    def test_removes_only_matching_provenance(self, movie_repo, characters):
        [internal] = movie_repo.bulk_insert([Movie(title="Fan Edit")])
        external = movie_repo.bulk_insert([_external_movie("f1"), _external_movie("f2")])
        movie_repo.replace_associations(internal.id, [characters[0].id])
        movie_repo.replace_associations(external[0].id, [characters[0].id, characters[1].id])

        deleted = movie_repo.delete_by_provenance(Provenance.EXTERNAL)

        assert deleted == 2
        assert movie_repo.count() == 1
        assert movie_repo.get_by_id(external[0].id) is None
        assert movie_repo.count_links() == 1
        assert movie_repo.list_character_ids(internal.id) == [characters[0].id]

    def test_reinsert_after_delete(self, movie_repo):
        """Les external_ref liberes peuvent etre reinseres."""
        movie_repo.bulk_insert([_external_movie("f1")])
        movie_repo.delete_by_provenance(Provenance.EXTERNAL)

        [movie] = movie_repo.bulk_insert([_external_movie("f1", "Remastered")])

        assert movie_repo.get_by_id(movie.id).title == "Remastered"


class TestReplaceAssociations:
    """Tests pour replace_associations."""

    def test_overwrites_previous_set(self, movie_repo, characters):
        """Remplacer {A,B} par {B,C} donne exactement {B,C}."""
        a, b, c = (character.id for character in characters)
        [movie] = movie_repo.bulk_insert([Movie(title="Fan Edit")])

        movie_repo.replace_associations(movie.id, [a, b])
        movie_repo.replace_associations(movie.id, [b, c])

        assert movie_repo.list_character_ids(movie.id) == [b, c]

    def test_is_idempotent(self, movie_repo, characters):
        ids = [character.id for character in characters]
        [movie] = movie_repo.bulk_insert([Movie(title="Fan Edit")])

        movie_repo.replace_associations(movie.id, ids)
        movie_repo.replace_associations(movie.id, ids)

        assert movie_repo.list_character_ids(movie.id) == sorted(ids)
        assert movie_repo.count_links() == 3

    def test_duplicates_are_collapsed(self, movie_repo, characters):
        luke = characters[0].id
        [movie] = movie_repo.bulk_insert([Movie(title="Fan Edit")])

        movie_repo.replace_associations(movie.id, [luke, luke, luke])

        assert movie_repo.list_character_ids(movie.id) == [luke]

    def test_empty_set_clears_links(self, movie_repo, characters):
        [movie] = movie_repo.bulk_insert([Movie(title="Fan Edit")])
        movie_repo.replace_associations(movie.id, [characters[0].id])

        movie_repo.replace_associations(movie.id, [])

        assert movie_repo.list_character_ids(movie.id) == []

    def test_other_movies_untouched(self, movie_repo, characters):
        first, second = movie_repo.bulk_insert([Movie(title="One"), Movie(title="Two")])
        movie_repo.replace_associations(first.id, [characters[0].id])
        movie_repo.replace_associations(second.id, [characters[1].id])

        movie_repo.replace_associations(first.id, [characters[2].id])

        assert movie_repo.list_character_ids(second.id) == [characters[1].id]

    def test_unknown_character_fails_and_keeps_previous_links(
        self, movie_repo, characters
    ):
        [movie] = movie_repo.bulk_insert([Movie(title="Fan Edit")])
        movie_repo.replace_associations(movie.id, [characters[0].id])

        with pytest.raises(PersistenceError):
            movie_repo.replace_associations(movie.id, [characters[1].id, 9999])

        assert movie_repo.list_character_ids(movie.id) == [characters[0].id]


class TestCountLinks:
    """Tests pour count_links."""

    def test_filters_by_movie_provenance(self, movie_repo, characters):
        [internal] = movie_repo.bulk_insert([Movie(title="Fan Edit")])
        [external] = movie_repo.bulk_insert([_external_movie("f1")])
        movie_repo.replace_associations(internal.id, [characters[0].id])
        movie_repo.replace_associations(external.id, [c.id for c in characters])

        assert movie_repo.count_links() == 4
        assert movie_repo.count_links(Provenance.INTERNAL) == 1
        assert movie_repo.count_links(Provenance.EXTERNAL) == 3
