"""Schema modules."""
from worktracker.schemas.auth import TokenResponse, RegisterResponse, RefreshTokenRequest, RefreshTokenResponse
from worktracker.schemas.user import (
    UserSummary,
    UserRegister,
    UserCreate,
    UserUpdate,
    UserResponse,
    UserWithStatsResponse,
    UserProfileResponse,
    MessageResponse,
)
from worktracker.schemas.task import TaskCreate, TaskUpdate, TaskResponse, PendingStatusResponse
from worktracker.schemas.stats import TaskStats, EmployeePerformance, DashboardSummary
