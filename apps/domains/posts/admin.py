from django.contrib import admin

from apps.domains.posts.models import Post, PostTag


class PostTagInline(admin.TabularInline):
    model = PostTag
    extra = 0


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "author", "published", "published_at", "created_at")
    list_filter = ("published", "allow_comments")
    search_fields = ("title", "slug", "author__email")
    raw_id_fields = ("author",)
    readonly_fields = ("slug", "published_at", "created_at", "updated_at")
    inlines = [PostTagInline]
