"""Pytest configuration and fixtures"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ancestry import api
from ancestry.digraph import Digraph
from ancestry.sap import SAP

DATA_DIR = Path(__file__).parent / 'data'


@pytest.fixture
def digraph1_path():
    return DATA_DIR / 'digraph1.txt'


@pytest.fixture
def digraph1(digraph1_path):
    """The 13-vertex fixture graph with two levels of shared ancestors"""
    with open(digraph1_path) as stream:
        return Digraph.read(stream)


@pytest.fixture
def small_graph():
    """Edges 1→0, 2→0, 3→1, 4→1"""
    return Digraph.from_edges(5, [(1, 0), (2, 0), (3, 1), (4, 1)])


@pytest.fixture
def client(digraph1):
    """Test client for the FastAPI app with digraph1 loaded"""
    api.set_engine(SAP(digraph1))
    yield TestClient(api.app)
    api.set_engine(None)
