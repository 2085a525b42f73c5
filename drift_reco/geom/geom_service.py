# geom/geom_service.py

import math
import numpy as np
import pandas as pd

GEOMETRY_COLUMNS = [
    "det_id", "det_name", "n_ele", "cell_spacing", "cell_width", "angle_from_vert",
    "xoffset", "height", "x0", "y0", "z0", "theta_x", "theta_y", "theta_z"
]


def rotation_matrix(theta_x, theta_y, theta_z):
    """
    Rotation taking layer-local coordinates to the global frame.
    Applied as Rz @ Ry @ Rx, all angles in radians.
    """
    cx, sx = math.cos(theta_x), math.sin(theta_x)
    cy, sy = math.cos(theta_y), math.sin(theta_y)
    cz, sz = math.cos(theta_z), math.sin(theta_z)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return rz @ ry @ rx


class Layer:
    def __init__(self, detector_id, detector_name, x0, y0, z0, n_elements, spacing, cell_width,
                 angle_from_vert=0.0, xoffset=0.0, height=0.0, theta_x=0.0, theta_y=0.0,
                 theta_z=0.0, delta_w=0.0):
        # --- Detector identifier ---
        self.detector_id = detector_id
        self.detector_name = detector_name

        # --- Cell layout ---
        self.n_elements = n_elements
        self.spacing = spacing
        self.cell_width = cell_width
        self.xoffset = xoffset
        self.angle_from_vert = angle_from_vert  # radians
        self.width = spacing * n_elements
        self.height = height

        # --- Survey info ---
        self.x0 = x0  # center of layer
        self.y0 = y0
        self.z0 = z0
        self.theta_x = theta_x
        self.theta_y = theta_y
        self.theta_z = theta_z

        # --- Alignment info ---
        self.delta_w = delta_w

        # Local measurement axis is rotated by angle_from_vert on top of the survey rZ
        self.origin = np.array([x0, y0, z0], dtype=float)
        self.rotM = rotation_matrix(theta_x, theta_y, angle_from_vert + theta_z)

    def contains_wire(self, wire):
        return 1 <= wire <= self.n_elements

    def get_wire_position(self, wire):
        """
        Local x of a wire, measured from the layer center along the
        measurement axis. Wires are numbered 1..n_elements.
        """
        if not self.contains_wire(wire):
            raise ValueError(f"Wire {wire} outside layer {self.detector_id} (1..{self.n_elements})")
        mid_index = (self.n_elements + 1) / 2.0
        return (wire - mid_index) * self.spacing + self.xoffset + self.delta_w

    def to_global(self, local_point):
        """Transform a local (x, y, z) point to the global frame."""
        local = np.asarray(local_point, dtype=float)
        return tuple(float(c) for c in self.origin + self.rotM @ local)

    def __repr__(self):
        return f"Layer({self.detector_id}, {self.detector_name!r}, n_elements={self.n_elements})"


class GeometryService:
    def __init__(self, tsv_path=None):
        self.layers = {}  # detectorID -> Layer instance
        self.tsv_path = tsv_path
        if tsv_path is not None:
            self.load_geometry_from_tsv()

    def load_geometry_from_tsv(self):
        df = pd.read_csv(self.tsv_path, sep='\t', comment='#', names=GEOMETRY_COLUMNS)

        for row in df.itertuples():
            det_id = int(row.det_id)
            if det_id in self.layers:
                print(f"[WARNING] Duplicate detector ID {det_id} ('{row.det_name}') in geometry. Skipping.")
                continue
            self.add_layer(Layer(
                detector_id=det_id,
                detector_name=str(row.det_name).strip(),
                x0=row.x0,
                y0=row.y0,
                z0=row.z0,
                n_elements=int(row.n_ele),
                spacing=row.cell_spacing,
                cell_width=row.cell_width,
                angle_from_vert=row.angle_from_vert,
                xoffset=row.xoffset,
                height=row.height,
                theta_x=row.theta_x,
                theta_y=row.theta_y,
                theta_z=row.theta_z,
            ))

    def add_layer(self, layer):
        self.layers[layer.detector_id] = layer

    def dump_geometry_summary(self, output_path="geometry_dump.tsv"):
        rows = []
        for det_id, layer in self.layers.items():
            rows.append({
                "detector_id": det_id,
                "detector_name": layer.detector_name,
                "n_elements": layer.n_elements,
                "spacing": layer.spacing,
                "xoffset": layer.xoffset,
                "x0": layer.x0,
                "y0": layer.y0,
                "z0": layer.z0,
                "angle_from_vert": layer.angle_from_vert,
                "wirePos_first": layer.get_wire_position(1),
                "wirePos_last": layer.get_wire_position(layer.n_elements),
            })

        df = pd.DataFrame(rows)
        df.to_csv(output_path, sep="\t", index=False)
        print(f"[INFO] Geometry summary dumped to {output_path}")
        return df

    def get_layer(self, det_id):
        return self.layers[det_id]

    def get_wire_position(self, det_id, wire):
        return self.layers[det_id].get_wire_position(wire)

    def to_global(self, det_id, local_point):
        return self.layers[det_id].to_global(local_point)
