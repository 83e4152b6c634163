import django_filters

from idea_hub.ideas.models import Idea


class IdeaFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Idea.Status.choices)
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    template = django_filters.CharFilter(field_name="template__id")
    department = django_filters.CharFilter(
        field_name="department", lookup_expr="iexact"
    )
    author = django_filters.NumberFilter(field_name="author__id")
    parent_idea = django_filters.UUIDFilter(field_name="parent_idea__id")

    class Meta:
        model = Idea
        fields = [
            "status",
            "category",
            "template",
            "department",
            "author",
            "parent_idea",
        ]
