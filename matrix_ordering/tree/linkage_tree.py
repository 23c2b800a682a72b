from __future__ import annotations

from typing import List, Optional

import networkx as nx
import numpy as np

from ..errors import InvalidArgumentError


class LinkageTree(nx.DiGraph):
    """Directed view of a SciPy linkage matrix.

    Leaves are named ``L{i}`` and carry ``is_leaf=True``, ``index`` (the row of
    the item in the clustered distance matrix) and ``label``. Internal nodes
    are named ``N{n + k}`` after the ``k``-th merge and carry ``height`` and
    ``merge_idx``. Edges point from parent to child and are inserted left
    child first, so successor order reproduces the dendrogram's left/right
    layout.
    """

    @classmethod
    def from_linkage(
        cls,
        linkage_matrix: np.ndarray,
        leaf_names: Optional[List[str]] = None,
    ) -> "LinkageTree":
        """
        Builds a tree from a SciPy linkage matrix.

        Args:
            linkage_matrix: A ``(n-1, 4)`` array from
                `scipy.cluster.hierarchy.linkage`.
            leaf_names: An optional list of names for the leaf nodes.

        Returns:
            A `LinkageTree` instance.

        Raises:
            InvalidArgumentError: If the matrix is malformed or a merge
                references a cluster that has not been formed yet.
        """
        linkage_matrix = np.asarray(linkage_matrix, dtype=float)
        if linkage_matrix.ndim != 2 or linkage_matrix.shape[1] != 4:
            raise InvalidArgumentError(
                "Expected a (n-1, 4) linkage matrix, "
                f"got shape {linkage_matrix.shape}."
            )
        n_leaves = linkage_matrix.shape[0] + 1
        if leaf_names is None:
            leaf_names = [f"leaf_{i}" for i in range(n_leaves)]
        if len(leaf_names) != n_leaves:
            raise InvalidArgumentError(
                f"Expected {n_leaves} leaf names, got {len(leaf_names)}."
            )

        G = cls()
        G.graph["linkage_matrix"] = linkage_matrix
        G.graph["n_leaves"] = n_leaves

        for i, name in enumerate(leaf_names):
            G.add_node(f"L{i}", label=name, index=i, is_leaf=True)

        def _id(idx: int) -> str:
            return f"L{idx}" if idx < n_leaves else f"N{idx}"

        for merge_idx, (left_idx, right_idx, dist, _) in enumerate(linkage_matrix):
            node_idx = n_leaves + merge_idx
            for child_idx in (left_idx, right_idx):
                if not 0 <= child_idx < node_idx:
                    raise InvalidArgumentError(
                        f"Merge {merge_idx} references cluster {int(child_idx)}, "
                        f"which does not exist before cluster {node_idx}."
                    )
            left_id, right_id = _id(int(left_idx)), _id(int(right_idx))
            if G.in_degree(left_id) or G.in_degree(right_id) or left_id == right_id:
                raise InvalidArgumentError(
                    f"Merge {merge_idx} reuses a cluster that was already merged."
                )

            node_id = f"N{node_idx}"
            G.add_node(node_id, is_leaf=False, height=float(dist), merge_idx=merge_idx)
            G.add_edge(node_id, left_id, weight=float(dist))
            G.add_edge(node_id, right_id, weight=float(dist))

        G.graph["root"] = f"N{2 * n_leaves - 2}" if n_leaves > 1 else "L0"
        return G

    def root(self) -> str:
        """Return the cached root node, discovering it if necessary."""
        r = self.graph.get("root")
        if r is None:
            roots = [u for u, d in self.in_degree() if d == 0]
            if len(roots) != 1:
                raise ValueError(f"Expected one root, got {roots}")
            r = roots[0]
            self.graph["root"] = r
        return r

    def leaf_order(self) -> np.ndarray:
        """Leaf indices in left-to-right dendrogram order.

        Equivalent to :func:`scipy.cluster.hierarchy.leaves_list` for the
        linkage matrix the tree was built from.
        """
        leaves = [
            self.nodes[n]["index"]
            for n in nx.dfs_preorder_nodes(self, self.root())
            if self.nodes[n].get("is_leaf", False)
        ]
        return np.asarray(leaves, dtype=int)

