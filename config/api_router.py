from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from neighborhub.audit.api.views import RecentAuditView
from neighborhub.forum.api.views import ForumPostViewSet
from neighborhub.marketplace.api.views import ListingViewSet
from neighborhub.messaging.api.views import ConversationViewSet
from neighborhub.neighborhoods.api.views import NeighborhoodViewSet
from neighborhub.safety.api.views import SafetyReportViewSet
from neighborhub.users.api.views import NeighborViewSet
from neighborhub.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

# users/neighbors/ must be matched before users/<pk>/
router.register("users/neighbors", NeighborViewSet, basename="neighbor")
router.register("users", UserViewSet, basename="user")
router.register("neighborhoods", NeighborhoodViewSet, basename="neighborhood")
router.register("forum/posts", ForumPostViewSet, basename="forum-post")
router.register("marketplace/listings", ListingViewSet, basename="listing")
router.register("safety/reports", SafetyReportViewSet, basename="safety-report")
router.register(
    "messages/conversations",
    ConversationViewSet,
    basename="conversation",
)


app_name = "api"
urlpatterns = [
    path("auth/", include("neighborhub.users.api.auth_urls")),
    path("messages/", include("neighborhub.messaging.api.urls")),
    path("audit/recent/", RecentAuditView.as_view(), name="audit-recent"),
    *router.urls,
]
