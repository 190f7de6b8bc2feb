"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Input validation for API requests
- Response serialization
- OpenAPI documentation generation
- Type safety
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from genhpp.core.constants import (
    ChatRole,
    ChatStatus,
    ExpenseCategory,
    MAX_COMMENT_LENGTH,
    MAX_LOAN_RATE_PCT,
    MAX_LOAN_TERM_MONTHS,
    MAX_MARGIN_PCT,
    MAX_REPORT_REASON_LENGTH,
    MAX_VAT_PCT,
    MIN_LOAN_AMOUNT,
    MIN_LOAN_RATE_PCT,
    MIN_REPORT_REASON_LENGTH,
    ReportCategory,
    ReportStatus,
)

# Field named "date" on expense schemas shadows the type inside the class body
DateType = date


# ======================
# Base Schemas
# ======================


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy
        validate_assignment=True,
        use_enum_values=True,
        json_encoders={
            Decimal: lambda v: float(v),
            date: lambda v: v.isoformat(),
            datetime: lambda v: v.isoformat(),
        },
    )


# ======================
# HPP Calculation Schemas
# ======================


class Material(BaseSchema):
    """One raw material line of a calculation."""

    name: str = Field(..., min_length=1, max_length=255)
    cost: float = Field(..., ge=0, description="Unit cost in Rupiah")
    qty: float = Field(..., ge=1, description="Quantity used per batch")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Nama bahan tidak boleh kosong")
        return v.strip()


class HPPInput(BaseSchema):
    """Cost inputs for an HPP calculation."""

    materials: List[Material] = Field(..., min_length=1)
    labor_cost: float = Field(default=0, ge=0)
    overhead: float = Field(default=0, ge=0)
    packaging: float = Field(default=0, ge=0)
    margin: float = Field(..., ge=0, le=MAX_MARGIN_PCT)


class CalculationBase(HPPInput):
    """Base calculation schema with common fields."""

    product_name: str = Field(..., min_length=1, max_length=255)
    product_quantity: int = Field(default=1, ge=1)
    production_tips: Optional[str] = None
    product_image_url: Optional[str] = None

    @field_validator("product_name")
    @classmethod
    def product_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Nama produk tidak boleh kosong")
        return v.strip()


class CalculationCreate(CalculationBase):
    """Schema for saving a new calculation."""

    share_publicly: bool = False


class CalculationUpdate(BaseSchema):
    """Schema for updating a calculation (all fields optional)."""

    product_name: Optional[str] = Field(None, min_length=1, max_length=255)
    materials: Optional[List[Material]] = Field(None, min_length=1)
    labor_cost: Optional[float] = Field(None, ge=0)
    overhead: Optional[float] = Field(None, ge=0)
    packaging: Optional[float] = Field(None, ge=0)
    margin: Optional[float] = Field(None, ge=0, le=MAX_MARGIN_PCT)
    product_quantity: Optional[int] = Field(None, ge=1)
    production_tips: Optional[str] = None
    product_image_url: Optional[str] = None
    share_publicly: Optional[bool] = None


class CalculationResponse(CalculationBase):
    """Schema for calculation responses."""

    id: int
    user_id: int
    total_hpp: float
    suggested_price: float
    is_public: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class CostComponent(BaseSchema):
    name: str
    value: float


class HPPResult(BaseSchema):
    """Computed HPP figures."""

    total_material_cost: float
    total_hpp: float
    profit: float
    suggested_price: float
    cost_breakdown: List[CostComponent]


# ======================
# Calculator Schemas
# ======================


class QuickHPPRequest(BaseSchema):
    total_material_cost: float = Field(..., ge=0)
    labor_cost: float = Field(default=0, ge=0)
    packaging: float = Field(default=0, ge=0)
    margin: float = Field(..., ge=0, le=MAX_MARGIN_PCT)


class IdealPriceRequest(BaseSchema):
    cost: float = Field(..., ge=0)
    margin: float = Field(..., ge=0, le=MAX_MARGIN_PCT)


class IdealPriceResult(BaseSchema):
    cost: float
    margin: float
    profit: float
    suggested_price: float


class PreVatPriceRequest(BaseSchema):
    final_price: float = Field(..., ge=0, description="Price including VAT")
    vat: float = Field(default=11, ge=0, le=MAX_VAT_PCT, description="VAT (PPN) percentage")


class PreVatPriceResult(BaseSchema):
    final_price: float
    vat: float
    base_price: float
    vat_amount: float


class ProfitSimulationRequest(BaseSchema):
    """Current and proposed HPP/price pair."""

    base_hpp: float = Field(..., ge=0)
    base_price: float = Field(..., ge=0)
    new_hpp: float = Field(..., ge=0)
    new_price: float = Field(..., ge=0)


class ProfitSimulationResult(BaseSchema):
    base_profit: float
    base_margin: float
    new_profit: float
    new_margin: float
    profit_change: float
    margin_change: float


class TargetProfitRequest(BaseSchema):
    profit_per_product: float = Field(..., ge=1)
    profit_target: float = Field(..., ge=1)


class TargetProfitResult(BaseSchema):
    profit_per_product: float
    profit_target: float
    units_to_sell: int


class LoanRequest(BaseSchema):
    """Annuity loan parameters."""

    amount: float = Field(..., ge=MIN_LOAN_AMOUNT)
    interest_rate_annual_pct: float = Field(..., ge=MIN_LOAN_RATE_PCT, le=MAX_LOAN_RATE_PCT)
    term_months: int = Field(..., ge=1, le=MAX_LOAN_TERM_MONTHS)
    include_schedule: bool = False


class LoanScheduleRow(BaseSchema):
    month: int
    payment: float
    interest_payment: float
    principal_payment: float
    remaining_balance: float


class LoanResult(BaseSchema):
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: Optional[List[LoanScheduleRow]] = None


class AdCampaign(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    platform: str = Field(..., min_length=1, max_length=100)
    cost: float = Field(..., ge=1)
    sales: int = Field(..., ge=0)
    avg_price: float = Field(..., ge=1)


class AdsRequest(BaseSchema):
    campaigns: List[AdCampaign] = Field(..., min_length=1)


class AdCampaignResult(AdCampaign):
    revenue: float
    roas: float
    roi: float


class AdsTotals(BaseSchema):
    cost: float
    revenue: float
    roas: float
    roi: float


class AdsResult(BaseSchema):
    campaigns: List[AdCampaignResult]
    totals: AdsTotals


# ======================
# Expense Schemas
# ======================


class ExpenseBase(BaseSchema):
    """Base expense schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=1)
    category: ExpenseCategory
    date: DateType


class ExpenseCreate(ExpenseBase):
    """Schema for recording a new expense."""

    pass


class ExpenseUpdate(BaseSchema):
    """Schema for updating an expense (all fields optional)."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, ge=1)
    category: Optional[ExpenseCategory] = None
    date: Optional[DateType] = None


class ExpenseResponse(ExpenseBase):
    id: int
    user_id: int
    created_at: datetime


class MonthlyExpenseSummary(BaseSchema):
    month: str
    total: float
    count: int


# ======================
# Report Schemas
# ======================


class StatsSummary(BaseSchema):
    total_products: int
    average_margin: float
    total_revenue: float
    total_production_cost: float
    estimated_profit: float


class StatChange(BaseSchema):
    change: float
    change_pct: float


class DashboardResponse(BaseSchema):
    current: StatsSummary
    previous: StatsSummary
    changes: Dict[str, StatChange]


class CategoryTotal(BaseSchema):
    category: str
    amount: float


class ProfitReportResponse(BaseSchema):
    month: str
    total_products: int
    total_revenue: float
    total_production_cost: float
    total_operational_cost: float
    estimated_profit: float
    average_margin: float
    expenses_by_category: List[CategoryTotal]


# ======================
# Community Schemas
# ======================


class PublicCalculationResponse(BaseSchema):
    """Feed entry for a shared calculation."""

    id: int
    calculation_id: int
    user_id: int
    user_name: str
    user_photo_url: Optional[str] = None
    product_name: str
    materials: List[Material]
    labor_cost: float
    overhead: float
    packaging: float
    margin: float
    product_quantity: int
    total_hpp: float
    suggested_price: float
    production_tips: Optional[str] = None
    product_image_url: Optional[str] = None
    is_featured: bool = False
    created_at: datetime


class MaterialLine(BaseSchema):
    name: str
    cost: float
    qty: float
    total: float


class PerProductBreakdown(BaseSchema):
    materials: List[MaterialLine]
    labor_per_product: float
    overhead_per_product: float
    packaging_per_product: float


class PublicCalculationDetail(PublicCalculationResponse):
    breakdown: PerProductBreakdown
    comment_count: int = 0


class CommentCreate(BaseSchema):
    text: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_id: Optional[int] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Komentar tidak boleh kosong")
        return v


class CommentResponse(BaseSchema):
    id: int
    public_calculation_id: int
    user_id: int
    user_name: str
    user_photo_url: Optional[str] = None
    text: str
    parent_id: Optional[int] = None
    created_at: datetime


class CommentNode(CommentResponse):
    """Comment with its nested replies."""

    replies: List["CommentNode"] = Field(default_factory=list)


CommentNode.model_rebuild()


class ContentReportCreate(BaseSchema):
    category: ReportCategory
    reason: str = Field(..., min_length=MIN_REPORT_REASON_LENGTH, max_length=MAX_REPORT_REASON_LENGTH)


class ContentReportResponse(BaseSchema):
    id: int
    public_calculation_id: int
    reporter_user_id: int
    reported_user_id: Optional[int] = None
    category: str
    reason: str
    status: str
    created_at: datetime


class ContentReportUpdate(BaseSchema):
    status: ReportStatus = ReportStatus.RESOLVED


# ======================
# Notification Schemas
# ======================


class AdminNotificationItem(BaseSchema):
    """One notification to deliver, in the client's camelCase shape."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    type: str = Field(default="admin", min_length=1)


class NotificationResponse(BaseSchema):
    id: int
    user_id: int
    type: str
    title: str
    content: str
    is_read: bool
    created_at: datetime


class NotificationListResponse(BaseSchema):
    unread_count: int
    notifications: List[NotificationResponse]


class MessageResponse(BaseSchema):
    message: str


# ======================
# Chat Schemas
# ======================


class ChatMessageCreate(BaseSchema):
    """A chat message; at least one of text, image_url or calculation."""

    text: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None
    calculation: Optional[Dict[str, Any]] = None
    reply_to_id: Optional[int] = None

    @model_validator(mode="after")
    def has_content(self):
        if not (self.text and self.text.strip()) and not self.image_url and not self.calculation:
            raise ValueError("Pesan tidak boleh kosong")
        return self


class ChatMessageResponse(BaseSchema):
    id: int
    session_id: int
    sender_id: int
    text: Optional[str] = None
    image_url: Optional[str] = None
    calculation: Optional[Dict[str, Any]] = None
    reply_to: Optional[Dict[str, Any]] = None
    created_at: datetime


class ChatSessionResponse(BaseSchema):
    id: int
    participant_ids: List[int]
    status: ChatStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class ChatSessionDetail(ChatSessionResponse):
    messages: List[ChatMessageResponse] = Field(default_factory=list)


# ======================
# User / Admin Schemas
# ======================


class UserResponse(BaseSchema):
    id: int
    name: str
    email: Optional[str] = None
    photo_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    photo_url: Optional[str] = None


class AdminRoleUpdate(BaseSchema):
    is_admin: bool


class SiteStatusResponse(BaseSchema):
    is_maintenance_mode: bool
    is_update_mode: bool
    updated_at: Optional[datetime] = None


class SiteStatusUpdate(BaseSchema):
    is_maintenance_mode: Optional[bool] = None
    is_update_mode: Optional[bool] = None


# ======================
# AI Schemas
# ======================


class ChatTurn(BaseSchema):
    role: ChatRole
    content: str


class BusinessCoachRequest(BaseSchema):
    history: List[ChatTurn] = Field(..., min_length=1)

    @field_validator("history")
    @classmethod
    def ends_with_user_turn(cls, v: List[ChatTurn]) -> List[ChatTurn]:
        if v[-1].role != ChatRole.USER.value:
            raise ValueError("The last history entry must be a user message")
        return v


class ConsultantRequest(BaseSchema):
    prompt: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatTurn] = Field(default_factory=list)


class AIChatResponse(BaseSchema):
    text: str


class ProductDescriptionRequest(BaseSchema):
    product_name: str = Field(..., min_length=1, max_length=255)


class ProductDescriptionResult(BaseSchema):
    instagram: str
    tiktok: str
    marketplace: str


class ProfitAnalysisRequest(BaseSchema):
    product_name: str = Field(..., min_length=1, max_length=255)
    materials: List[Material] = Field(..., min_length=1)
    labor_cost: float = Field(default=0, ge=0)
    overhead: float = Field(default=0, ge=0)
    packaging: float = Field(default=0, ge=0)
    current_margin: float = Field(..., ge=0, le=MAX_MARGIN_PCT)
    target_margin: float = Field(..., ge=1, le=MAX_MARGIN_PCT)
    total_hpp: float = Field(..., ge=0)
    product_quantity: int = Field(default=1, ge=1)


class ProfitInsights(BaseSchema):
    summary: str
    market_price_benchmark: Optional[str] = None
    material_suggestions: List[str] = Field(default_factory=list)
    efficiency_suggestions: List[str] = Field(default_factory=list)
    pricing_strategy: str


class ProfitAnalysisResult(BaseSchema):
    insights: ProfitInsights


class ImageModerationRequest(BaseSchema):
    image_data_uri: str = Field(..., description="data:<mimetype>;base64,<encoded_data>")

    @field_validator("image_data_uri")
    @classmethod
    def is_data_uri(cls, v: str) -> str:
        if not v.startswith("data:") or ";base64," not in v:
            raise ValueError("Expected a data URI in the form data:<mimetype>;base64,<data>")
        return v


class ImageModerationResult(BaseSchema):
    is_safe: bool
    reason: Optional[str] = None

