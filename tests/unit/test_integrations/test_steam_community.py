"""Tests for the community profile XML client."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree
from unittest.mock import MagicMock, patch

import pytest
import requests

from src.integrations.steam_community import CommunityProfileInfo, SteamCommunityClient

STEAM_ID = "76561197960287930"

PROFILE_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<profile>
    <steamID64>76561197960287930</steamID64>
    <steamID><![CDATA[Rabscuttle]]></steamID>
    <onlineState>online</onlineState>
    <location><![CDATA[Bellevue, Washington, United States]]></location>
</profile>
"""


def _response(content: bytes) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.raise_for_status = MagicMock()
    return response


class TestFetchProfileInfo:
    """Tests for SteamCommunityClient.fetch_profile_info."""

    @patch("src.integrations.steam_community.requests.get")
    def test_parses_state_and_location(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(PROFILE_XML)

        info = SteamCommunityClient(timeout=5).fetch_profile_info(STEAM_ID)

        assert info == CommunityProfileInfo(online_state="online", location="Bellevue, Washington, United States")
        assert mock_get.call_args.args[0] == f"https://steamcommunity.com/profiles/{STEAM_ID}?xml=1"
        assert mock_get.call_args.kwargs["timeout"] == 5

    @patch("src.integrations.steam_community.requests.get")
    def test_missing_fields_are_none(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(b"<profile><location>   </location></profile>")

        info = SteamCommunityClient().fetch_profile_info(STEAM_ID)

        assert info.online_state is None
        assert info.location is None

    @patch("src.integrations.steam_community.requests.get")
    def test_invalid_xml_raises(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(b"<html>Rate limited")

        with pytest.raises(ElementTree.ParseError):
            SteamCommunityClient().fetch_profile_info(STEAM_ID)

    @patch("src.integrations.steam_community.requests.get")
    def test_network_error_propagates(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.Timeout("slow")

        with pytest.raises(requests.Timeout):
            SteamCommunityClient().fetch_profile_info(STEAM_ID)
