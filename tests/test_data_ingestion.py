import os
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from ekflow.data_ingestion import GraphSpec, load_edge_csv, load_graph, load_graph_file, parse_graph_text
from ekflow.errors import FlowNetworkError, GraphFormatError, InvalidCapacity, InvalidVertexIndex
from ekflow.graph import FlowNetwork, NetworkXFlowNetwork

DATA_DIR = Path(__file__).resolve().parent.parent / 'ekflow' / 'data'


class TestParseGraphText(unittest.TestCase):

    def test_parse_triples(self):
        spec = parse_graph_text("4\n0 1 3\n1 2 2\n2 3 5\n", 'line.txt')
        self.assertEqual(spec.name, 'line.txt')
        self.assertEqual(spec.vertex_count, 4)
        self.assertEqual(spec.edges, [(0, 1, 3), (1, 2, 2), (2, 3, 5)])

    def test_whitespace_layout_is_free(self):
        spec = parse_graph_text("  4 0 1\n3   1 2 2\n\n2\t3 5")
        self.assertEqual(spec.edges, [(0, 1, 3), (1, 2, 2), (2, 3, 5)])

    def test_no_edges(self):
        spec = parse_graph_text("3\n")
        self.assertEqual(spec.vertex_count, 3)
        self.assertEqual(spec.edges, [])

    def test_missing_vertex_count(self):
        with self.assertRaises(GraphFormatError):
            parse_graph_text("   \n")

    def test_non_positive_vertex_count(self):
        with self.assertRaises(GraphFormatError) as ctx:
            parse_graph_text("0\n")
        self.assertEqual(ctx.exception.line, 1)

    def test_non_integer_token(self):
        with self.assertRaises(GraphFormatError) as ctx:
            parse_graph_text("4\n0 1 3\n1 x 2\n", 'bad.txt')
        self.assertEqual(ctx.exception.source_name, 'bad.txt')
        self.assertEqual(ctx.exception.line, 3)
        self.assertIn('destination', str(ctx.exception))

    def test_truncated_edge(self):
        with self.assertRaises(GraphFormatError) as ctx:
            parse_graph_text("4\n0 1 3\n1 2\n", 'truncated.txt')
        self.assertEqual(ctx.exception.line, 3)
        self.assertIn('truncated', str(ctx.exception))
        self.assertTrue(str(ctx.exception).startswith('truncated.txt:3: '))

    def test_format_error_is_a_flow_network_error(self):
        with self.assertRaises(FlowNetworkError):
            parse_graph_text("four")
        with self.assertRaises(ValueError):
            parse_graph_text("four")


class TestGraphSpecBuild(unittest.TestCase):

    def test_build_matrix_network(self):
        network = GraphSpec('line', 4, [(0, 1, 3), (1, 2, 2), (2, 3, 5)]).build()
        self.assertIsInstance(network, FlowNetwork)
        self.assertEqual(network.name, 'line')
        self.assertEqual(network.compute_max_flow(), 2)

    def test_build_networkx_network(self):
        network = GraphSpec('line', 4, [(0, 1, 3), (1, 2, 2), (2, 3, 5)]).build('networkx')
        self.assertIsInstance(network, NetworkXFlowNetwork)
        self.assertEqual(network.compute_max_flow(), 2)

    def test_invalid_index_aborts_assembly(self):
        spec = parse_graph_text("4\n0 1 3\n5 0 3\n2 3 5\n")
        with self.assertRaises(InvalidVertexIndex):
            spec.build()

    def test_negative_capacity_aborts_assembly(self):
        spec = parse_graph_text("3\n0 1 -3\n")
        with self.assertRaises(InvalidCapacity):
            spec.build()


class TestGraphFiles(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, filename: str, content: str) -> str:
        path = os.path.join(self.temp_dir.name, filename)
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_bundled_sample_graphs(self):
        spec = load_graph_file(DATA_DIR / 'match1.txt')
        self.assertEqual(spec.name, 'match1.txt')
        self.assertEqual(spec.vertex_count, 4)
        self.assertEqual(len(spec.edges), 4)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_graph_file(os.path.join(self.temp_dir.name, 'nope.txt'))

    def test_binary_file_is_a_format_error(self):
        path = os.path.join(self.temp_dir.name, 'binary.txt')
        with open(path, 'wb') as f:
            f.write(b"2\n0 1 \xff\xfe\n")
        with self.assertRaises(GraphFormatError) as ctx:
            load_graph_file(path)
        self.assertEqual(ctx.exception.source_name, 'binary.txt')
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_binary_csv_is_a_format_error(self):
        path = os.path.join(self.temp_dir.name, 'binary.csv')
        with open(path, 'wb') as f:
            f.write(b"source,destination,capacity\n0,1,\xff\xfe\n")
        with self.assertRaises(GraphFormatError):
            load_edge_csv(path)

    def test_load_edge_csv(self):
        path = self._write('diamond.csv', "source,destination,capacity\n0,1,10\n0,2,10\n1,3,10\n2,3,10\n")
        spec = load_edge_csv(path)
        self.assertEqual(spec.name, 'diamond.csv')
        self.assertEqual(spec.vertex_count, 4)
        self.assertEqual(spec.edges, [(0, 1, 10), (0, 2, 10), (1, 3, 10), (2, 3, 10)])
        self.assertEqual(spec.build().compute_max_flow(), 20)

    def test_load_edge_csv_with_explicit_vertex_count(self):
        df = pd.DataFrame({'source': [0], 'destination': [1], 'capacity': [7], 'label': ['a']})
        path = os.path.join(self.temp_dir.name, 'edges.csv')
        df.to_csv(path, index=False)
        spec = load_edge_csv(path, vertex_count=5)
        self.assertEqual(spec.vertex_count, 5)
        self.assertEqual(spec.edges, [(0, 1, 7)])

    def test_csv_missing_column(self):
        path = self._write('bad.csv', "source,destination\n0,1\n")
        with self.assertRaises(GraphFormatError) as ctx:
            load_edge_csv(path)
        self.assertIn('capacity', str(ctx.exception))

    def test_csv_empty_field(self):
        path = self._write('gap.csv', "source,destination,capacity\n0,1,4\n1,2,\n")
        with self.assertRaises(GraphFormatError) as ctx:
            load_edge_csv(path)
        self.assertEqual(ctx.exception.line, 3)

    def test_csv_non_integer_capacity(self):
        path = self._write('float.csv', "source,destination,capacity\n0,1,4.5\n")
        with self.assertRaises(GraphFormatError):
            load_edge_csv(path)

    def test_csv_empty_file(self):
        path = self._write('empty.csv', "")
        with self.assertRaises(GraphFormatError):
            load_edge_csv(path)

    def test_load_graph_dispatches_on_suffix(self):
        csv_path = self._write('line.csv', "source,destination,capacity\n0,1,3\n1,2,2\n2,3,5\n")
        txt_path = self._write('line.txt', "4\n0 1 3\n1 2 2\n2 3 5\n")
        self.assertEqual(load_graph(csv_path).edges, load_graph(txt_path).edges)


if __name__ == '__main__':
    unittest.main()
