from django.urls import path

from .views import ConversationListView, MessageListCreateView

urlpatterns = [
    path('', MessageListCreateView.as_view(), name='messages'),
    path('conversations/', ConversationListView.as_view(), name='conversations'),
]
