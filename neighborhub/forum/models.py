from django.conf import settings
from django.db import models
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class ForumPost(models.Model):
    class Category(models.TextChoices):
        GENERAL = "general", _("General")
        EVENTS = "events", _("Events")
        PETS = "pets", _("Pets")
        RECOMMENDATIONS = "recommendations", _("Recommendations")
        LOST_FOUND = "lost-found", _("Lost & Found")
        ANNOUNCEMENTS = "announcements", _("Announcements")
        QUESTIONS = "questions", _("Questions")
        SERVICES = "services", _("Services")

    title = models.CharField(_("Title"), max_length=200)
    content = models.TextField(_("Content"), max_length=5000)
    category = models.CharField(max_length=20, choices=Category.choices)
    # Delimited tag string, see neighborhub.utils.tags
    tags = models.CharField(max_length=512, blank=True)
    images = models.JSONField(default=list, blank=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="forum_posts",
    )
    neighborhood = models.ForeignKey(
        "neighborhoods.Neighborhood",
        on_delete=models.CASCADE,
        related_name="forum_posts",
    )
    is_sticky = models.BooleanField(default=False)
    is_solved = models.BooleanField(default=False)
    is_moderated = models.BooleanField(default=False)
    moderation_reason = models.CharField(max_length=255, blank=True)
    views = models.PositiveIntegerField(default=0)
    last_activity = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_sticky", "-last_activity"]
        indexes = [
            models.Index(
                fields=["neighborhood", "-last_activity"],
                name="forumpost_nbhd_activity_idx",
            ),
            models.Index(
                fields=["neighborhood", "category"],
                name="forumpost_nbhd_category_idx",
            ),
        ]

    def __str__(self) -> str:
        return self.title

    def touch_activity(self) -> None:
        self.last_activity = timezone.now()
        type(self).objects.filter(pk=self.pk).update(last_activity=self.last_activity)

    def increment_views(self) -> None:
        type(self).objects.filter(pk=self.pk).update(views=F("views") + 1)
        self.refresh_from_db(fields=["views"])


class PostLike(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_likes",
    )
    post = models.ForeignKey(ForumPost, on_delete=models.CASCADE, related_name="likes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "post"], name="unique_post_like"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Like({self.user_id} -> {self.post_id})"


class Comment(models.Model):
    content = models.TextField(_("Content"), max_length=1000)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="forum_comments",
    )
    post = models.ForeignKey(
        ForumPost,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        related_name="replies",
        null=True,
        blank=True,
    )
    is_moderated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "pk"]
        indexes = [
            models.Index(
                fields=["post", "created_at"],
                name="comment_post_created_idx",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Comment({self.author_id} on {self.post_id})"
