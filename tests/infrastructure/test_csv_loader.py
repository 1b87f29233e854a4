import os
import tempfile
import unittest

import numpy as np

from keyml.domain._errors import InvalidArgumentError
from keyml.infrastructure._csv_loader import (
    CSVLoader,
    dataset_from_columns,
    dataset_from_loader,
)


def _write(tmpdir: str, text: str, name: str = "data.csv") -> str:
    path = os.path.join(tmpdir, name)
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    return path


_CSV = (
    "a, b ,name,target\n"
    "1,2,x,3\n"
    "4,5,y,9\n"
    "oops,6,z,1\n"
    "7,8,w,15\n"
)


class TestCSVLoader(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = _write(self._tmp.name, _CSV)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            CSVLoader(os.path.join(self._tmp.name, "missing.csv")).load()

    def test_access_before_load_raises(self):
        loader = CSVLoader(self.path)
        self.assertFalse(loader.is_loaded)
        with self.assertRaises(RuntimeError):
            loader.column_names()
        with self.assertRaises(RuntimeError):
            loader.has_column("a")
        with self.assertRaises(RuntimeError):
            loader.column_index("a")
        with self.assertRaises(RuntimeError):
            _ = loader.frame

    def test_empty_file_raises(self):
        path = _write(self._tmp.name, "", "empty.csv")
        with self.assertRaises(InvalidArgumentError):
            CSVLoader(path).load()

    def test_header_only_file_loads(self):
        path = _write(self._tmp.name, "a,b\n", "header.csv")
        loader = CSVLoader(path).load()
        self.assertTrue(loader.is_loaded)
        self.assertEqual(loader.column_names(), ["a", "b"])
        self.assertEqual(len(loader.frame), 0)
        self.assertEqual(dataset_from_columns(loader, ["a"], "b").num_rows, 0)

    def test_header_is_trimmed(self):
        loader = CSVLoader(self.path).load()
        self.assertEqual(loader.column_names(), ["a", "b", "name", "target"])
        self.assertEqual(loader.column_index("b"), 1)
        self.assertEqual(loader.column_index(" b "), 1)
        self.assertTrue(loader.has_column("target"))
        self.assertFalse(loader.has_column("c"))

    def test_unknown_column_raises(self):
        loader = CSVLoader(self.path).load()
        with self.assertRaises(KeyError):
            loader.column_index("c")

    def test_frame_holds_raw_strings(self):
        loader = CSVLoader(self.path).load()
        self.assertEqual(loader.frame.shape, (4, 4))
        self.assertEqual(list(loader.frame.iloc[0]), ["1", "2", "x", "3"])

    def test_quoted_fields(self):
        path = _write(self._tmp.name, 'k;v\n"1;5";2\n', "semi.csv")
        loader = CSVLoader(path, delimiter=";").load()
        self.assertEqual(list(loader.frame.iloc[0]), ["1;5", "2"])


class TestDatasetBuilders(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.loader = CSVLoader(_write(self._tmp.name, _CSV)).load()

    def tearDown(self):
        self._tmp.cleanup()

    def test_from_columns_skips_unparseable_rows(self):
        ds = dataset_from_columns(self.loader, ["a", "b"], "target")
        np.testing.assert_array_equal(ds.features, [[1, 2], [4, 5], [7, 8]])
        np.testing.assert_array_equal(ds.targets, [3, 9, 15])

    def test_from_columns_ignores_unused_text(self):
        ds = dataset_from_columns(self.loader, ["b"], "target")
        self.assertEqual(ds.num_rows, 4)
        np.testing.assert_array_equal(ds.features[:, 0], [2, 5, 6, 8])

    def test_from_loader_standardizes(self):
        path = _write(self._tmp.name, "x0,x1,y\n1,5,10\n2,5,20\n3,5,30\n", "num.csv")
        ds = dataset_from_loader(CSVLoader(path).load())

        self.assertEqual(ds.num_features, 2)
        np.testing.assert_allclose(ds.features[:, 0].mean(), 0.0, atol=1e-12)
        np.testing.assert_allclose(ds.features[:, 0].std(), 1.0, rtol=1e-12)
        # constant column is left untouched
        np.testing.assert_array_equal(ds.features[:, 1], [5.0, 5.0, 5.0])
        np.testing.assert_allclose(ds.targets.std(), 1.0, rtol=1e-12)

    def test_from_loader_target_index_and_raw_values(self):
        path = _write(self._tmp.name, "y,x0,x1\n1,2,3\n4,5,6\n7,8\n", "raw.csv")
        ds = dataset_from_loader(CSVLoader(path).load(), 0, standardize=False)

        np.testing.assert_array_equal(ds.targets, [1, 4])
        np.testing.assert_array_equal(ds.features, [[2, 3], [5, 6]])

    def test_from_loader_rejects_out_of_range_target(self):
        path = _write(self._tmp.name, "a,b,c\n1,2,3\n4,5,6\n", "abc.csv")
        loader = CSVLoader(path).load()
        for bad in (3, 5, -4):
            with self.subTest(target_column=bad):
                with self.assertRaises(InvalidArgumentError):
                    dataset_from_loader(loader, bad, standardize=False)

        ds = dataset_from_loader(loader, -3, standardize=False)
        np.testing.assert_array_equal(ds.targets, [1, 4])


if __name__ == "__main__":
    unittest.main()
