from django.urls import path
from . import views

app_name = 'commands'

urlpatterns = [
    # POST /api/commands/  {"intent": "...", ...}
    path('', views.run_command, name='run'),
]
