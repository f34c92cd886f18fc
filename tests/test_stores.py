"""Record store behaviour, run against both the in-memory and database backends."""
import pytest

from awc_api.exceptions import (
    AlreadyApprovedException,
    InvalidStatusException,
    NotFoundException,
    ValidationException,
)
from awc_api.stores import ANONYMOUS
from awc_api.stores.seed import seed_demo_data


# --- Prayers ---

def test_create_prayer(stores, clock):
    prayer = stores.prayers.create(name="  Sam ", request="  Pray for healing  ", anonymous=False)
    assert prayer.id == "1"
    assert prayer.name == "Sam"
    assert prayer.request == "Pray for healing"
    assert prayer.hearts == 0
    assert prayer.anonymous is False
    assert prayer.created_at == clock()
    assert stores.prayers.get("1") == prayer


@pytest.mark.parametrize("request_text", [None, "", "   ", "\n\t"])
def test_create_prayer_requires_text(stores, request_text):
    with pytest.raises(ValidationException) as exc:
        stores.prayers.create(name="Sam", request=request_text)
    assert exc.value.detail == "Prayer request required"
    assert stores.prayers.list() == []


def test_anonymous_prayer_overwrites_name(stores):
    prayer = stores.prayers.create(name="Sam", request="Guidance", anonymous=True)
    assert prayer.name == ANONYMOUS
    assert prayer.anonymous is True
    # persisted, not computed on read
    assert stores.prayers.get(prayer.id).name == ANONYMOUS


def test_blank_name_becomes_anonymous(stores):
    prayer = stores.prayers.create(name="   ", request="Guidance")
    assert prayer.name == ANONYMOUS
    assert prayer.anonymous is False


def test_overlong_names_rejected(stores):
    long_name = "N" * 101
    for create in (
        lambda: stores.prayers.create(name=long_name, request="Guidance"),
        lambda: stores.testimonials.create(name=long_name, testimony="Praise", anonymous=False),
    ):
        with pytest.raises(ValidationException) as exc:
            create()
        assert exc.value.detail == "Name must be less than 100 characters"

    prayer = stores.prayers.create(name="A", request="one")
    with pytest.raises(ValidationException):
        stores.prayers.create_comment(prayer.id, author_name=long_name, content="hi")
    assert stores.prayers.list_comments() == []
    assert stores.testimonials.list() == []


def test_names_stored_in_full(stores):
    name = "N" * 100
    assert stores.prayers.create(name=name, request="Guidance").name == name
    # anonymous submissions ignore the name entirely
    assert stores.prayers.create(name="N" * 150, request="Peace", anonymous=True).name == ANONYMOUS


def test_increment_heart_only_touches_target(stores):
    a = stores.prayers.create(name="A", request="one")
    b = stores.prayers.create(name="B", request="two")

    hearted = stores.prayers.increment_heart(a.id)
    assert hearted.hearts == 1
    assert stores.prayers.increment_heart(a.id).hearts == 2
    assert stores.prayers.get(a.id).hearts == 2
    assert stores.prayers.get(b.id).hearts == 0


@pytest.mark.parametrize("missing_id", ["999", "abc", ""])
def test_increment_heart_missing_prayer(stores, missing_id):
    a = stores.prayers.create(name="A", request="one")
    stores.prayers.increment_heart(a.id)
    with pytest.raises(NotFoundException) as exc:
        stores.prayers.increment_heart(missing_id)
    assert exc.value.detail == "Prayer not found"
    assert [p.hearts for p in stores.prayers.list()] == [1]


def test_list_is_newest_first(stores, clock):
    first = stores.prayers.create(name="A", request="first")
    clock.advance(minutes=5)
    second = stores.prayers.create(name="B", request="second")
    assert [p.id for p in stores.prayers.list()] == [second.id, first.id]


def test_list_ties_break_by_insertion(stores):
    # frozen clock: identical timestamps
    a = stores.prayers.create(name="A", request="first")
    b = stores.prayers.create(name="B", request="second")
    c = stores.prayers.create(name="C", request="third")
    assert [p.id for p in stores.prayers.list()] == [c.id, b.id, a.id]


def test_prayer_comments(stores, clock):
    prayer = stores.prayers.create(name="A", request="one")
    c1 = stores.prayers.create_comment(prayer.id, author_name="Jo", content=" Praying! ")
    clock.advance(seconds=1)
    c2 = stores.prayers.create_comment(prayer.id, author_name="Kim", content="Amen", anonymous=True)

    assert c1.content == "Praying!"
    assert c1.prayer_id == prayer.id
    assert c2.author_name == ANONYMOUS
    assert [c.id for c in stores.prayers.list_comments(prayer.id)] == [c2.id, c1.id]
    assert stores.prayers.list_comments("999") == []


def test_prayer_comment_validation(stores):
    prayer = stores.prayers.create(name="A", request="one")
    with pytest.raises(ValidationException) as exc:
        stores.prayers.create_comment(prayer.id, author_name="Jo", content="  ")
    assert exc.value.detail == "Comment content required"

    with pytest.raises(NotFoundException) as exc:
        stores.prayers.create_comment("999", author_name="Jo", content="Hello")
    assert exc.value.detail == "Prayer not found"
    assert stores.prayers.list_comments() == []


def test_delete_prayer_cascades_to_its_comments_only(stores):
    keep = stores.prayers.create(name="A", request="keep")
    drop = stores.prayers.create(name="B", request="drop")
    kept_comment = stores.prayers.create_comment(keep.id, author_name="Jo", content="stays")
    stores.prayers.create_comment(drop.id, author_name="Jo", content="goes")
    stores.prayers.create_comment(drop.id, author_name="Kim", content="goes too")

    stores.prayers.delete(drop.id)

    assert [p.id for p in stores.prayers.list()] == [keep.id]
    assert [c.id for c in stores.prayers.list_comments()] == [kept_comment.id]
    assert stores.prayers.list_comments(drop.id) == []
    with pytest.raises(NotFoundException):
        stores.prayers.get(drop.id)
    with pytest.raises(NotFoundException):
        stores.prayers.delete(drop.id)


def test_delete_comment(stores):
    prayer = stores.prayers.create(name="A", request="one")
    comment = stores.prayers.create_comment(prayer.id, author_name="Jo", content="hi")
    removed = stores.prayers.delete_comment(comment.id)
    assert removed.prayer_id == prayer.id
    assert stores.prayers.list_comments() == []
    with pytest.raises(NotFoundException) as exc:
        stores.prayers.delete_comment(comment.id)
    assert exc.value.detail == "Comment not found"


def test_prayer_stats(stores):
    assert stores.prayers.stats().model_dump() == {"totalPrayers": 0, "totalHearts": 0, "totalComments": 0}
    a = stores.prayers.create(name="A", request="one")
    b = stores.prayers.create(name="B", request="two")
    for _ in range(3):
        stores.prayers.increment_heart(a.id)
    stores.prayers.increment_heart(b.id)
    stores.prayers.create_comment(b.id, author_name="Jo", content="hi")
    assert stores.prayers.stats().model_dump() == {"totalPrayers": 2, "totalHearts": 4, "totalComments": 1}


def test_seed_demo_data_assigns_first_ids(stores, clock):
    assert seed_demo_data(stores, clock()) is True
    assert {p.id for p in stores.prayers.list()} == {"1", "2"}
    assert stores.prayers.get("1").hearts == 23
    assert all(t.approved for t in stores.testimonials.list())
    # only seeds empty stores
    assert seed_demo_data(stores, clock()) is False
    assert stores.prayers.create(name="Sam", request="next").id == "3"


# --- Testimonials ---

def test_create_testimonial_starts_pending(stores):
    t = stores.testimonials.create(name=" Ruth ", testimony=" He is faithful ", anonymous=False)
    assert t.name == "Ruth"
    assert t.testimony == "He is faithful"
    assert t.approved is False
    assert t.approved_at is None


@pytest.mark.parametrize("name,testimony,anonymous,message", [
    ("Ruth", "", False, "Testimony content required"),
    ("Ruth", "   ", False, "Testimony content required"),
    (None, None, True, "Testimony content required"),
    ("Ruth", "x" * 2001, False, "Testimony must be less than 2000 characters"),
    ("", "Praise report", False, "Name required when not submitting anonymously"),
    ("   ", "Praise report", False, "Name required when not submitting anonymously"),
    (None, "Praise report", False, "Name required when not submitting anonymously"),
])
def test_testimonial_validation(stores, name, testimony, anonymous, message):
    with pytest.raises(ValidationException) as exc:
        stores.testimonials.create(name=name, testimony=testimony, anonymous=anonymous)
    assert exc.value.detail == message
    assert stores.testimonials.list() == []


def test_testimony_at_max_length_is_accepted(stores):
    t = stores.testimonials.create(name=None, testimony="x" * 2000, anonymous=True)
    assert t.name == ANONYMOUS
    assert len(t.testimony) == 2000


def test_approve_is_one_way(stores, clock):
    t = stores.testimonials.create(name="Ruth", testimony="Praise", anonymous=False)
    clock.advance(hours=2)
    approved = stores.testimonials.approve(t.id)
    assert approved.approved is True
    assert approved.approved_at == clock()

    clock.advance(hours=1)
    with pytest.raises(AlreadyApprovedException) as exc:
        stores.testimonials.approve(t.id)
    assert exc.value.detail == "Testimonial already approved"
    assert stores.testimonials.get(t.id).approved_at == approved.approved_at


def test_approve_missing_testimonial(stores):
    with pytest.raises(NotFoundException) as exc:
        stores.testimonials.approve("42")
    assert exc.value.detail == "Testimonial not found"


def test_testimonial_counts_and_delete(stores):
    a = stores.testimonials.create(name="A", testimony="one")
    stores.testimonials.create(name="B", testimony="two")
    stores.testimonials.approve(a.id)
    assert stores.testimonials.counts().model_dump() == {"pending": 1, "approved": 1, "total": 2}
    assert [t.id for t in stores.testimonials.list(approved=True)] == [a.id]

    stores.testimonials.delete(a.id)
    assert stores.testimonials.counts().model_dump() == {"pending": 1, "approved": 0, "total": 1}
    with pytest.raises(NotFoundException):
        stores.testimonials.delete(a.id)


# --- Blog comments ---

def test_blog_comment_create_and_filter(stores, clock):
    c1 = stores.blog_comments.create("welcome-post", author_name="Ann", content="Lovely", author_email="ann@example.com")
    clock.advance(seconds=30)
    c2 = stores.blog_comments.create("welcome-post", author_name="Ben", content="Amen")
    other = stores.blog_comments.create("other-post", author_name="Cy", content="Hi")

    assert c1.status == "approved"
    assert c1.author_email == "ann@example.com"
    assert c2.author_email is None
    assert [c.id for c in stores.blog_comments.list(post_id="welcome-post")] == [c2.id, c1.id]
    assert [c.id for c in stores.blog_comments.list()] == [other.id, c2.id, c1.id]
    assert stores.blog_comments.count() == 3


@pytest.mark.parametrize("author,content", [(None, "Hi"), ("Ann", None), ("  ", "Hi"), ("Ann", "   ")])
def test_blog_comment_requires_author_and_content(stores, author, content):
    with pytest.raises(ValidationException) as exc:
        stores.blog_comments.create("p", author_name=author, content=content)
    assert exc.value.detail == "Author name and content are required"
    assert stores.blog_comments.count() == 0


def test_blog_comment_length_bound(stores):
    with pytest.raises(ValidationException):
        stores.blog_comments.create("p", author_name="Ann", content="x" * 1001)
    assert stores.blog_comments.create("p", author_name="Ann", content="x" * 1000).content == "x" * 1000


def test_blog_comment_moderation(stores):
    c = stores.blog_comments.create("p", author_name="Ann", content="Hi")
    assert stores.blog_comments.set_status(c.id, "rejected").status == "rejected"
    assert stores.blog_comments.list(post_id="p", status="approved") == []
    assert [x.id for x in stores.blog_comments.list(status="rejected")] == [c.id]

    with pytest.raises(InvalidStatusException) as exc:
        stores.blog_comments.set_status(c.id, "spam")
    assert exc.value.detail == "Invalid status. Must be one of: approved, pending, rejected"
    assert stores.blog_comments.get(c.id).status == "rejected"

    with pytest.raises(NotFoundException):
        stores.blog_comments.set_status("999", "approved")


def test_blog_comment_delete(stores):
    c = stores.blog_comments.create("p", author_name="Ann", content="Hi")
    stores.blog_comments.delete(c.id)
    assert stores.blog_comments.count() == 0
    with pytest.raises(NotFoundException):
        stores.blog_comments.delete(c.id)
