GRID_SIZE = 9

# Ball colors in palette order. RGB values are only consumed by presentation layers.
PALETTE = {
    'red':    (196, 40, 40),     # #C42828
    'blue':   (45, 90, 200),     # #2D5AC8
    'yellow': (232, 200, 48),    # #E8C830
    'green':  (60, 160, 72),     # #3CA048
    'brown':  (128, 82, 44),     # #80522C
}

# Number of colors previewed (and spawned) per turn.
LOOKAHEAD = 3
# Minimum run length that counts as a line.
LINE_THRESHOLD = 5
# Balls placed on an empty grid when a session starts.
START_BALL_COUNT = 5
