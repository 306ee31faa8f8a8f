# tests/unit/test_agent_ids.py
import pytest

from ncportal.services.agent_service import next_agent_id


@pytest.mark.parametrize("existing, expected", [
    ([], "AG001"),
    (["AG001"], "AG002"),
    (["AG001", "AG007", "AG003"], "AG008"),
    (["SUP1", "AGX", None], "AG001"),
    (["AG999"], "AG1000"),
])
def test_next_agent_id(existing, expected):
    """
    GIVEN the existing agent IDs
    WHEN the next ID is computed
    THEN it follows the highest AGnnn, ignoring other shapes.
    """
    assert next_agent_id(existing) == expected
