"""
Fluid Blob
==========

An ambient, mouse-reactive background of soft colour blobs.

A population of discs drifts across the canvas and wraps at the edges:

  - Discs within 160 px of the cursor are pushed away, harder the closer
    they are
  - Each disc's colour follows its distance to the cursor through a
    cyclic palette gradient, smoothed frame to frame
  - While the cursor rests, discs creep toward it one small step at a time
  - The whole frame is blurred for a frosted-glass look

The first palette entry is the page background; entries 1..n form the
gradient ring.
"""

__version__ = "1.0.0"
__author__ = "Fluid Blob"
