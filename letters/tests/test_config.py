from django.db import connection
from django.test import SimpleTestCase

from treehole.config import TreeHoleConfig


class TreeHoleConfigTest(SimpleTestCase):

    def test_sqlite_uses_immediate_transactions_and_a_test_file(self):
        database = TreeHoleConfig(db_engine="sqlite", sqlite_path="data/app.sqlite3").database()

        self.assertEqual(database["OPTIONS"]["transaction_mode"], "IMMEDIATE")
        self.assertEqual(database["TEST"]["NAME"], "data/test_app.sqlite3")

    def test_mysql_reads_committed_rows(self):
        database = TreeHoleConfig(db_engine="mysql", db_timeout=5).database()

        self.assertEqual(database["OPTIONS"]["isolation_level"], "read committed")
        self.assertEqual(database["OPTIONS"]["connect_timeout"], 5)
        self.assertNotIn("TEST", database)

    def test_invalid_engine_is_rejected(self):
        with self.assertRaises(ValueError):
            TreeHoleConfig(db_engine="oracle")

    def test_test_database_is_not_in_memory(self):
        if connection.vendor != "sqlite":
            self.skipTest("SQLite only")

        self.assertFalse(connection.is_in_memory_db())
