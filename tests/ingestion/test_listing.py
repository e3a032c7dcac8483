import unittest
from unittest.mock import MagicMock, patch

import requests

from podcast_sync.ingestion.listing import extract_urls, fetch_listing


FEED = """<?xml version="1.0"?>
<rss><channel><title>Show</title>
<item><enclosure url="http://h/ep2.mp3" type="audio/mpeg"/></item>
<item><itunes:image href="http://h/cover.jpg"/><media:content url="http://h/thumb.jpg"/></item>
<item><enclosure url="http://h/ep1.mp3" length="1"/></item>
"""


class TestExtractUrls(unittest.TestCase):
    def test_extracts_in_document_order(self):
        assert extract_urls(FEED) == ["http://h/ep2.mp3", "http://h/thumb.jpg", "http://h/ep1.mp3"]

    def test_partial_document(self):
        assert extract_urls('<enclosure url="http://h/a.mp3"/><enclosure url="http://h/b') == [
            "http://h/a.mp3",
            "http://h/b",
        ]

    def test_keeps_duplicates(self):
        assert extract_urls('url="a" url="a"') == ["a", "a"]

    def test_no_urls(self):
        assert extract_urls("<html></html>") == []


class TestFetchListing(unittest.TestCase):
    @patch("podcast_sync.ingestion.listing.requests.get")
    def test_fetch_listing_extracts_urls(self, mock_get):
        response = MagicMock()
        response.content = FEED.encode("utf-8")
        mock_get.return_value = response

        urls = fetch_listing("http://h/feed.xml")

        assert urls == ["http://h/ep2.mp3", "http://h/thumb.jpg", "http://h/ep1.mp3"]
        mock_get.assert_called_once_with("http://h/feed.xml", timeout=30)

    @patch("podcast_sync.ingestion.listing.requests.get")
    def test_utf8_feed_without_charset(self, mock_get):
        response = requests.Response()
        response.status_code = 200
        response.headers["Content-Type"] = "text/xml"
        response._content = '<enclosure url="http://h/épisode.mp3"/>'.encode("utf-8")
        response.encoding = requests.utils.get_encoding_from_headers(response.headers)
        mock_get.return_value = response

        assert fetch_listing("http://h/feed.xml") == ["http://h/épisode.mp3"]

    @patch("podcast_sync.ingestion.listing.requests.get")
    def test_network_error_gives_empty_listing(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        assert fetch_listing("http://h/feed.xml") == []

    @patch("podcast_sync.ingestion.listing.requests.get")
    def test_http_error_gives_empty_listing(self, mock_get):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404")
        mock_get.return_value = response
        assert fetch_listing("http://h/feed.xml") == []


if __name__ == "__main__":
    unittest.main()
