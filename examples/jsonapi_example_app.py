"""Example FastAPI app serving JSON:API payloads with ``include`` support.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload

Try:
    GET /articles/1?include=author,comments.author
    GET /articles?include=author
"""
from __future__ import annotations

from typing import Generator

from fastapi import Depends, FastAPI, Request
from sqlalchemy import Column, ForeignKey, Integer, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, relationship, selectinload, sessionmaker
from sqlalchemy.pool import StaticPool

from jsonapi_payload.middleware import ErrorHandlerMiddleware
from jsonapi_payload.responses import JSONAPIResponse
from jsonapi_payload.serializers import JSONAPISerializer
from jsonapi_payload.utils import include_paths

DATABASE_URL = "sqlite://"

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SessionLocal = sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("people.id"))
    author = relationship("Person")
    comments = relationship("Comment", order_by="Comment.id")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"))
    author_id = Column(Integer, ForeignKey("people.id"))
    author = relationship("Person")


class PersonSerializer(JSONAPISerializer):
    class Meta:
        type_ = "people"
        model = Person
        fields = ["id", "name"]


class CommentSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        model = Comment
        fields = ["id", "body"]

    included_serializers = {"author": PersonSerializer}


class ArticleSerializer(JSONAPISerializer):
    class Meta:
        type_ = "articles"
        model = Article
        fields = ["id", "title"]

    included_serializers = {"author": PersonSerializer, "comments": CommentSerializer}


def get_session() -> Generator[Session, None, None]:
    with SessionLocal() as session:
        yield session


def seed_example_data(session: Session) -> None:
    """Insert example people, articles and comments if empty."""
    if session.scalars(select(Person)).first() is not None:
        return
    dan = Person(id=9, name="Dan")
    ann = Person(id=10, name="Ann")
    session.add_all([dan, ann])
    session.add_all(
        [
            Article(id=1, title="JSON:API paints my bikeshed!", author=dan),
            Article(id=2, title="Rails is Omakase", author=dan),
            Comment(id=5, body="First!", article_id=1, author=dan),
            Comment(id=12, body="I like XML better", article_id=1, author=ann),
        ]
    )
    session.commit()


def _article_query():
    # Everything the endpoint may include is loaded up front; the payload
    # then keeps only what the client asked for.
    return select(Article).options(
        selectinload(Article.author),
        selectinload(Article.comments).selectinload(Comment.author),
    )


app = FastAPI(title="JSON:API payload example")
app.add_middleware(ErrorHandlerMiddleware)


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(engine)
    with SessionLocal() as session:
        seed_example_data(session)


@app.get("/articles", response_class=JSONAPIResponse)
def list_articles(
    request: Request,
    include: list[str] = Depends(include_paths),
    session: Session = Depends(get_session),
) -> JSONAPIResponse:
    articles = session.scalars(_article_query().order_by(Article.id)).all()
    base_url = str(request.base_url)
    payload = ArticleSerializer().to_many_payload(
        articles,
        include=include,
        base_url=base_url,
        links={"self": str(request.url)},
        meta={"total": len(articles)},
    )
    return JSONAPIResponse(payload)


@app.get("/articles/{article_id}", response_class=JSONAPIResponse)
def retrieve_article(
    article_id: int,
    request: Request,
    include: list[str] = Depends(include_paths),
    session: Session = Depends(get_session),
) -> JSONAPIResponse:
    article = session.scalars(_article_query().where(Article.id == article_id)).first()
    payload = ArticleSerializer().to_one_payload(
        article,
        include=include,
        base_url=str(request.base_url),
        links={"self": str(request.url)},
    )
    return JSONAPIResponse(payload)
