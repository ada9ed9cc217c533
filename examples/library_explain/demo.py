"""
Library example that logs an explain plan after every mapped statement.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from explainshadow import CommandType, Configuration, ExplainInterceptor, SqlSession, SqlSessionFactory
from explainshadow.utils import configure_logging

SCHEMA = (
    "CREATE TABLE IF NOT EXISTS writer (id INTEGER PRIMARY KEY, name TEXT NOT NULL, country TEXT)",
    "CREATE TABLE IF NOT EXISTS book ("
    "id INTEGER PRIMARY KEY, title TEXT NOT NULL, published INTEGER NOT NULL, "
    "author_id INTEGER REFERENCES writer(id))",
)


def build_configuration(dsn: str = "sqlite:///:memory:") -> Configuration:
    configuration = Configuration.from_dsn(dsn)
    for index, sql in enumerate(SCHEMA):
        configuration.add_statement(f"schema.{index}", sql, CommandType.UPDATE)
    configuration.add_statement(
        "writer.insert",
        "INSERT INTO writer (id, name, country) VALUES (#{id}, #{name}, #{country})",
        CommandType.INSERT,
    )
    configuration.add_statement(
        "book.insert",
        "INSERT INTO book (id, title, published, author_id) "
        "VALUES (#{id}, #{title}, #{published}, #{author_id})",
        CommandType.INSERT,
    )
    configuration.add_statement(
        "book.by_author",
        "SELECT b.title, w.name AS author FROM book b JOIN writer w ON w.id = b.author_id "
        "WHERE w.name = #{author} AND b.published = 1 ORDER BY b.title",
        CommandType.SELECT,
    )
    configuration.add_interceptor(ExplainInterceptor())
    return configuration


def seed_sample_data(session: SqlSession) -> Dict[str, int]:
    for index in range(len(SCHEMA)):
        session.update(f"schema.{index}")
    writers = [
        {"id": 1, "name": "Octavia Butler", "country": "USA"},
        {"id": 2, "name": "Haruki Murakami", "country": "Japan"},
    ]
    books = [
        {"id": 1, "title": "Kindred", "published": True, "author_id": 1},
        {"id": 2, "title": "Parable of the Sower", "published": True, "author_id": 1},
        {"id": 3, "title": "Kafka on the Shore", "published": True, "author_id": 2},
    ]
    counts = {
        "writers": sum(session.insert("writer.insert", writer) for writer in writers),
        "books": sum(session.insert("book.insert", book) for book in books),
    }
    session.commit()
    return counts


def fetch_books_by_author(session: SqlSession, author: str) -> List[Dict[str, Any]]:
    return session.select_list("book.by_author", {"author": author})


def run_demo(dsn: str = "sqlite:///:memory:", *, author: str = "Octavia Butler") -> List[Dict[str, Any]]:
    factory = SqlSessionFactory(build_configuration(dsn))
    with factory.open_session() as session:
        seed_sample_data(session)
        return fetch_books_by_author(session, author)


if __name__ == "__main__":
    configure_logging()
    logging.getLogger("explainshadow.statements").setLevel(logging.DEBUG)
    for entry in run_demo("sqlite:///library_explain.db"):
        print(f"{entry['title']} by {entry['author']}")
