"""
Tests pour reconcile (resolution des references personnages).
"""

from src.core.entities.catalog import Character, Movie, Provenance
from src.core.ports.api_clients import UpstreamMovie
from src.services.reconciler import MovieAssociations, reconcile


def _character(character_id: int, ref: str) -> Character:
    return Character(
        id=character_id, name=ref, provenance=Provenance.EXTERNAL, external_ref=ref
    )


def _movie(movie_id: int, ref: str) -> Movie:
    return Movie(id=movie_id, title=ref, provenance=Provenance.EXTERNAL, external_ref=ref)


def _upstream(ref: str, character_refs: list[str]) -> UpstreamMovie:
    return UpstreamMovie(
        title=ref,
        release_date="1977-05-25",
        external_ref=ref,
        character_refs=character_refs,
    )


class TestReconcile:
    """Tests pour reconcile."""

    def test_resolves_references_to_local_ids(self):
        result = reconcile(
            characters=[_character(10, "c1"), _character(11, "c2")],
            movies=[_movie(1, "f1")],
            upstream_movies=[_upstream("f1", ["c2", "c1"])],
        )

        assert result == [MovieAssociations(movie_id=1, character_ids=(11, 10))]

    def test_unresolved_references_are_counted_and_dropped(self):
        [associations] = reconcile(
            characters=[_character(10, "c1")],
            movies=[_movie(1, "f1")],
            upstream_movies=[_upstream("f1", ["c1", "c99", "c98"])],
        )

        assert associations.character_ids == (10,)
        assert associations.unresolved == 2

    def test_duplicate_references_yield_one_link(self):
        [associations] = reconcile(
            characters=[_character(10, "c1")],
            movies=[_movie(1, "f1")],
            upstream_movies=[_upstream("f1", ["c1", "c1"])],
        )

        assert associations.character_ids == (10,)

    def test_movie_without_references_is_skipped(self):
        result = reconcile(
            characters=[_character(10, "c1")],
            movies=[_movie(1, "f1"), _movie(2, "f2")],
            upstream_movies=[_upstream("f1", []), _upstream("f2", ["c1"])],
        )

        assert [a.movie_id for a in result] == [2]

    def test_skipped_upstream_movie_produces_nothing(self):
        """Un film amont non admis (donc non insere) n'a pas d'entree."""
        result = reconcile(
            characters=[_character(10, "c1")],
            movies=[],
            upstream_movies=[_upstream("f1", ["c1"])],
        )

        assert result == []

    def test_only_unresolved_references_gives_empty_set(self):
        [associations] = reconcile(
            characters=[],
            movies=[_movie(1, "f1")],
            upstream_movies=[_upstream("f1", ["c99"])],
        )

        assert associations.character_ids == ()
        assert associations.unresolved == 1
