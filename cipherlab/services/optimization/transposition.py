import logging
from collections.abc import Callable, Sequence

import numpy as np

from cipherlab.services.language.alphabet import BITS_PER_LETTER
from cipherlab.services.language.model import QUADGRAMS, LanguageModel

logger = logging.getLogger(__name__)

DecryptIndexes = Callable[[int, Sequence[int]], np.ndarray]
GetIndex = Callable[[np.ndarray, int, int, int], np.ndarray]


def transposition_solve(
    ciphertext: Sequence[int] | np.ndarray,
    language: LanguageModel,
    decrypt_indexes: DecryptIndexes,
    get_index: GetIndex,
    min_key_length: int = 3,
    max_key_length: int = 15,
) -> list[int]:
    """
    Rebuild a column order greedily from bigram adjacency.

    For each key length and each starting column, the order grows by
    appending the unused column whose letters form the most probable bigrams
    with the last placed column, summed over all complete rows. Each full
    order is scored on its quadgram decryption and the best one is kept.
    A poor early choice is never revisited.

    Args:
        ciphertext: Code points
        language: Scoring model
        decrypt_indexes: Maps ``(length, order)`` to the ciphertext index of
            every plaintext position
        get_index: Maps ``(rows, col, key_length, num_rows)`` to the
            ciphertext indexes of a column, vectorized over ``rows``
        min_key_length: Shortest key tried
        max_key_length: Upper bound on the key length, exclusive

    Returns:
        Column order, ``order[i]`` being the ciphertext column placed at
        plaintext column ``i``; empty when the text is too short
    """
    codes = np.asarray(ciphertext, dtype=np.int64)
    length = codes.size
    indexes = language.scoring_table[codes]
    bigrams = language.ngram_table(2)

    best_score = float("-inf")
    best_key: list[int] = []

    for key_length in range(min(min_key_length, length), min(max_key_length, length)):
        num_rows = length // key_length
        rows = np.arange(num_rows)
        columns = np.stack(
            [indexes[get_index(rows, col, key_length, num_rows)] for col in range(key_length)]
        )
        # adjacency[c1, c2]: summed log probability of c1 followed by c2 on every row
        adjacency = bigrams[(columns[:, None, :] << BITS_PER_LETTER) | columns[None, :, :]].sum(axis=2)

        for start_col in range(key_length):
            key = [start_col]

            while len(key) < key_length:
                last = key[-1]
                max_score = float("-inf")
                max_col = 0
                for col in range(key_length):
                    if col in key:
                        continue
                    if adjacency[last, col] > max_score:
                        max_score = adjacency[last, col]
                        max_col = col
                key.append(max_col)

            score = language.score(codes[decrypt_indexes(length, key)], QUADGRAMS)
            if score > best_score:
                best_score = score
                best_key = key

        logger.debug("Key length %d best so far %.2f", key_length, best_score)

    return best_key
