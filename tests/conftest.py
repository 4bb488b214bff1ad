"""Shared fixtures: one trained English model for the whole session."""

import pytest

from cipherlab.services.language.training import train_bundled

# Not part of the training corpus.
PLAINTEXT = (
    "The old lighthouse keeper climbed the spiral stairs every evening just before "
    "the sun went down. He carried a small oil lamp, a notebook and a pencil that he "
    "sharpened with his pocket knife. At the top he wrote down the direction of the "
    "wind, the colour of the sky and the number of ships he could see on the horizon. "
    "Nobody had asked him to keep these notes, but he believed that somebody would "
    "one day want to know how the weather had changed along this part of the coast. "
    "In winter the storms were so strong that the whole tower seemed to shake, and "
    "the waves threw stones against the windows of the kitchen below. In summer the "
    "sea was calm and children from the village came to fish from the rocks while "
    "their parents walked along the beach. When the keeper finally retired, his "
    "daughter found forty notebooks in a wooden chest under his bed, each one filled "
    "with neat handwriting and small drawings of clouds, birds and boats. She gave "
    "them to the university in the city, where students still read them to learn "
    "about the history of the weather and the life of a quiet and patient man."
)

SHORT_PLAINTEXT = (
    "Meet me at the north gate of the castle after midnight and bring the letters "
    "that the captain left on his desk before he sailed away to the islands."
)


@pytest.fixture(scope="session")
def english():
    """English model trained from the bundled corpus."""
    return train_bundled("english")


@pytest.fixture
def plaintext():
    return PLAINTEXT


@pytest.fixture
def short_plaintext():
    return SHORT_PLAINTEXT
