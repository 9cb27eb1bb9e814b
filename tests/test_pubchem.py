"""
Tests for the PubChem client, with the HTTP session mocked out.
"""

from unittest.mock import MagicMock

import pytest
import requests

from iupacgraph.errors import PubChemError
from iupacgraph.pubchem import PubChemClient


def make_session(payload=None, error=None):
    response = MagicMock()
    response.json.return_value = payload
    if error is not None:
        response.raise_for_status.side_effect = error
    session = MagicMock()
    session.get.return_value = response
    return session


class TestPubChemClient:
    """Property lookups."""

    def test_inchi(self):
        session = make_session({"PropertyTable": {"Properties": [{"CID": 5997, "InChI": "InChI=1S/C8H10N4O2"}]}})
        client = PubChemClient(session=session, min_request_interval=0)

        assert client.inchi("caffeine") == "InChI=1S/C8H10N4O2"
        url = session.get.call_args[0][0]
        assert url == "https://pubchem.ncbi.nlm.nih.gov/rest/pug/compound/name/caffeine/property/InChI/JSON"
        assert session.get.call_args[1]["timeout"] == 15

    def test_iupac_name_quotes_name(self):
        session = make_session({"PropertyTable": {"Properties": [{"IUPACName": "propan-2-ol"}]}})
        client = PubChemClient(base_url="http://example.test/", session=session, min_request_interval=0)

        assert client.iupac_name("isopropyl alcohol") == "propan-2-ol"
        assert session.get.call_args[0][0] == (
            "http://example.test/compound/name/isopropyl%20alcohol/property/IUPACName/JSON"
        )

    def test_http_error(self):
        session = make_session(error=requests.HTTPError("404 Not Found"))
        client = PubChemClient(session=session, min_request_interval=0)

        with pytest.raises(PubChemError):
            client.inchi("not a compound")

    def test_missing_property(self):
        session = make_session({"Fault": {"Code": "PUGREST.NotFound"}})
        client = PubChemClient(session=session, min_request_interval=0)

        with pytest.raises(PubChemError):
            client.inchi("caffeine")

    def test_rate_limit(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr("iupacgraph.pubchem.time.sleep", sleeps.append)
        session = make_session({"PropertyTable": {"Properties": [{"InChI": "x"}]}})
        client = PubChemClient(session=session, min_request_interval=10)

        client.inchi("a")
        client.inchi("b")
        assert len(sleeps) == 1
        assert 0 < sleeps[0] <= 10
