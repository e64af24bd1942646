# ABOUTME: Tests for record building, album filtering and metadata derivation
# ABOUTME: Pure-logic tests: positional mapping, arity dropping, idempotent filtering, path segments

import pytest

from album_archiver.extraction.models import AlbumTarget, LinkRecord, ResolvedAlbum
from album_archiver.extraction.records import (
    build_records,
    filter_albums,
    is_album_link,
    last_path_segment,
    resolve_metadata,
)


def _record(link: str, subreddit: str = "https://www.reddit.com/r/aww/", title: str = "Puppies") -> LinkRecord:
    return LinkRecord(
        poster="https://www.reddit.com/user/poster",
        subreddit=subreddit,
        link=link,
        comments="https://www.reddit.com/r/aww/comments/aaa111/puppies/",
        title=title,
    )


class TestBuildRecords:
    def test_fields_assigned_positionally(self):
        records = build_records([("poster", "sub", "link", "comments", "title")])

        assert records == [
            LinkRecord(poster="poster", subreddit="sub", link="link", comments="comments", title="title")
        ]

    @pytest.mark.parametrize(
        "sequence",
        [
            (),
            ("only title",),
            ("a", "b", "c", "d"),
            ("a", "b", "c", "d", "e", "f"),
        ],
    )
    def test_wrong_arity_is_dropped(self, sequence):
        assert build_records([sequence]) == []

    def test_mixed_batch_keeps_only_five_field_sequences(self):
        sequences = [
            ("a", "b", "c", "d", "e"),
            ("x", "y"),
            ("1", "2", "3", "4", "5"),
        ]

        records = build_records(sequences)

        assert [record.poster for record in records] == ["a", "1"]


class TestAlbumFilter:
    @pytest.mark.parametrize(
        "link,expected",
        [
            ("https://imgur.com/a/abcd12", True),
            ("https://imgur.com/gallery/abcd12", True),
            ("https://m.imgur.com/a/abcd12/", True),
            ("https://i.imgur.com/abcd12.jpg", False),
            ("https://i.imgur.com/abcd12.PNG", False),
            ("https://i.redd.it/abcd12.jpg", False),
            ("https://example.com/a/abcd12", False),
            ("https://notimgur.co/a/abcd12", False),
            ("not a url", False),
        ],
    )
    def test_is_album_link(self, link, expected):
        assert is_album_link(link) is expected

    def test_filter_selects_album_records(self):
        records = [
            _record("https://imgur.com/a/abcd12"),
            _record("https://i.imgur.com/single.jpg"),
            _record("https://www.youtube.com/watch?v=x"),
        ]

        targets = filter_albums(records)

        assert [target.link for target in targets] == ["https://imgur.com/a/abcd12"]
        assert all(isinstance(target, AlbumTarget) for target in targets)

    def test_filter_is_idempotent(self):
        records = [
            _record("https://imgur.com/a/one"),
            _record("https://i.imgur.com/two.png"),
            _record("https://imgur.com/a/three"),
        ]

        once = filter_albums(records)
        twice = filter_albums(once)

        assert twice == once


class TestMetadataExtraction:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("/r/aww/", "aww"),
            ("https://imgur.com/a/abcd12/", "abcd12"),
            ("https://imgur.com/a/abcd12", "abcd12"),
            ("https://www.reddit.com/r/EarthPorn/", "EarthPorn"),
            ("plain", "plain"),
            ("trailing//", ""),
        ],
    )
    def test_last_path_segment(self, value, expected):
        assert last_path_segment(value) == expected

    def test_resolve_metadata(self):
        target = filter_albums([_record("https://imgur.com/a/abcd12/", subreddit="/r/aww/")])[0]

        album = resolve_metadata(target)

        assert isinstance(album, ResolvedAlbum)
        assert album.category_name == "aww"
        assert album.album_id == "abcd12"
        assert album.title == target.title

    def test_resolve_metadata_leaves_target_untouched(self):
        target = AlbumTarget(**_record("https://imgur.com/a/abcd12/").model_dump())
        before = target.model_dump()

        resolve_metadata(target)

        assert target.model_dump() == before
        assert not hasattr(target, "album_id")
