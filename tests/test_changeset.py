from trash import Changeset
from trash.changeset import as_changeset

from models import Post, post_changeset


class TestChangeset:
    """Test building and validating changesets"""

    def test_change_starts_empty_and_valid(self):
        """Test a new changeset has no changes or errors"""
        post = Post(title="Hello, World")
        changeset = Changeset.change(post)

        assert changeset.data is post
        assert changeset.changes == {}
        assert changeset.valid

    def test_cast_keeps_permitted_changed_fields(self):
        """Test cast keeps only permitted fields that changed"""
        post = Post(title="Hello, World", author="Jane")
        changeset = Changeset.cast(
            post, {"title": "Hello, Again", "author": "Jane", "id": 5}, ["title", "author"]
        )

        assert changeset.changes == {"title": "Hello, Again"}

    def test_put_change_is_additive(self):
        """Test put_change adds to existing changes"""
        changeset = Changeset.change(Post(), title="Hello, Again")
        updated = changeset.put_change("author", "Jane")

        assert updated.changes == {"title": "Hello, Again", "author": "Jane"}
        assert changeset.changes == {"title": "Hello, Again"}

    def test_put_change_keeps_errors(self):
        """Test put_change keeps validation errors"""
        changeset = post_changeset(Post(title="Hello, World"), {"title": "Hello, Again"})
        updated = changeset.put_change("title", "Other")

        assert updated.errors == (("author", "can't be blank"),)
        assert not updated.valid

    def test_validate_required_reads_pending_changes(self):
        """Test required fields are checked against pending changes"""
        assert post_changeset(Post(), {"author": "Jane"}).valid
        assert post_changeset(Post(author="Jane"), {}).valid
        assert not post_changeset(Post(), {"author": "  "}).valid

    def test_apply_changes_writes_to_instance(self):
        """Test changes are written onto the instance"""
        post = Post(title="Hello, World")
        Changeset.change(post, title="Hello, Again").apply_changes()

        assert post.title == "Hello, Again"

    def test_as_changeset(self):
        """Test instances are wrapped and changesets passed through"""
        post = Post()
        changeset = Changeset.change(post, title="x")

        assert as_changeset(changeset) is changeset
        assert as_changeset(post).data is post
        assert as_changeset(post).changes == {}
