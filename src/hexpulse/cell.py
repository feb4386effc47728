import math

import numpy as np


class Cell:
    """One hexagon of the grid for a single frame."""

    def __init__(self, index, row, col, x, y, radius, rotation, color):
        self.index = index
        self.row = row
        self.col = col
        self.x = x
        self.y = y
        self.radius = radius
        self.rotation = rotation
        self.color = color  # RGB

    @property
    def bgr(self):
        """Fill color in OpenCV channel order."""
        r, g, b = self.color
        return (b, g, r)

    def vertices(self):
        """Corner points of the rotated hexagon as an int32 polygon."""
        points = []
        for i in range(6):
            angle = (math.pi / 3) * i + self.rotation
            points.append(
                [
                    self.x + self.radius * math.cos(angle),
                    self.y + self.radius * math.sin(angle),
                ]
            )
        return np.round(np.array(points)).astype(np.int32)
