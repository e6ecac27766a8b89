#!/usr/bin/env python3

# Boundary symbols.
# Every sentence is padded with two START symbols before the first word and two
# STOP symbols after the last word, so that a trigram history is always defined.
START_WORD = "<S>"
STOP_WORD = "</S>"
START_TAG = "<S>"
STOP_TAG = "</S>"

BOUNDARY_TAGS = {START_TAG, STOP_TAG}
