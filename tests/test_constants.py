"""Centralized constants for testing purposes.
Do not use in production code.
"""

from typing import Final

TEST_USER_ID: Final[int] = 3857
TEST_PASSWORD_SIZE: Final[int] = 512
TEST_RANDOM_SEED: Final[int] = 3735928559

# Fixed garbage fed to every decoder from each start offset.
GARBAGE_MESSAGE: Final[bytes] = bytes(
    [
        220, 88, 183, 255, 71, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 173, 0, 0, 0, 228, 174, 98, 187, 191, 135, 253, 200,
        51, 230, 114, 247, 151, 109, 237, 79, 87, 32, 94, 5, 204, 46, 154, 30,
        91, 6, 103, 148, 254, 129, 65, 171, 228, 167, 224, 163, 9, 15, 206, 90,
        58, 11, 205, 55, 211, 33, 87, 178, 149, 91, 28, 236, 218, 112, 231, 34,
        82, 82, 134, 103, 137, 115, 27, 156, 102, 159, 220, 226, 89, 42, 25, 37,
        9, 84, 239, 76, 161, 198, 72, 167, 163, 39, 91, 148, 191, 17, 191, 87,
        169, 179, 136, 10, 194, 154, 4, 40, 107, 109, 61, 161, 20, 176, 247, 13,
        214, 106, 229, 45, 17, 5, 60, 189, 64, 39, 166, 208, 14, 57, 25, 140,
        148, 25, 177, 246, 189, 43, 181, 88, 204, 29, 126, 224, 100, 143, 93, 60,
        57, 249, 55, 0, 87, 83, 227, 224, 166, 59, 214, 81, 144, 129, 58, 6,
        57, 46, 254, 232, 41, 220, 209, 230, 167, 138, 158, 94, 180, 125, 247, 26,
        162, 116, 238, 202, 187, 100, 65, 13, 180, 44, 245, 159, 83, 161, 176, 58,
        72, 236, 109, 105, 160, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 11, 0, 0, 0, 98, 0, 0, 0, 1, 0, 0,
        32, 2, 0, 0, 0, 1, 0, 0, 32, 3, 0, 0, 0, 2, 0, 0,
        16, 1, 0, 0, 0, 3, 0, 0, 48, 0, 1, 0, 0, 200, 0, 0,
        80, 3, 0, 0, 0, 0, 0, 0, 0, 244, 1, 0, 112, 1, 246, 1,
        0, 112, 1, 189, 2, 0, 96, 144, 178, 236, 250, 255, 255, 255, 255, 145,
        1, 0, 96, 144, 226, 33, 60, 222, 2, 0, 0, 189, 2, 0, 96, 0,
        0, 0, 0, 0, 0, 0, 0, 190, 2, 0, 16, 1, 0, 0, 0, 12,
        0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 110,
        0, 0, 0, 0, 0, 0, 0, 11, 0, 0, 0, 98, 0, 0, 0, 1,
        0, 0, 32, 2, 0, 0, 0, 1, 0, 0, 32, 3, 0, 0, 0, 2,
        0, 0, 16, 1, 0, 0, 0, 3, 0, 0, 48, 0, 1, 0, 0, 200,
        0, 0, 80, 3, 0, 0, 0, 0, 0, 0, 0, 244, 1, 0, 112, 1,
        246, 1, 0, 112, 1, 189, 2, 0, 96, 144, 178, 236, 250, 255, 255, 255,
        255, 145, 1, 0, 96, 144, 226, 33, 60, 222, 2, 0, 0, 189, 2, 0,
        96, 0, 0, 0, 0, 0, 0, 0, 0, 190, 2, 0, 16, 1, 0, 0,
        0,
    ]
)
