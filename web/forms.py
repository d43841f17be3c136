from django import forms

from order.models import Order
from product.models import Review

PAYMENT_METHODS = [
    ("card", "Card"),
    ("paypal", "PayPal"),
    ("cod", "Cash on delivery"),
]

ORDERING_CHOICES = [
    ("-created_at", "Newest"),
    ("price", "Price: low to high"),
    ("-price", "Price: high to low"),
    ("name", "Name"),
]


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput)


class QuantityForm(forms.Form):
    quantity = forms.IntegerField(min_value=1, initial=1)


class ReviewForm(forms.ModelForm):
    rating = forms.TypedChoiceField(
        choices=[(i, str(i)) for i in range(5, 0, -1)], coerce=int
    )

    class Meta:
        model = Review
        fields = ["rating", "title", "comment"]


class AddressForm(forms.Form):
    full_name = forms.CharField(max_length=150)
    line1 = forms.CharField(max_length=255, label="Address")
    city = forms.CharField(max_length=100)
    postal_code = forms.CharField(max_length=20)
    country = forms.CharField(max_length=100)


class CheckoutForm(AddressForm):
    billing_same_as_shipping = forms.BooleanField(required=False, initial=True)
    billing_full_name = forms.CharField(max_length=150, required=False)
    billing_line1 = forms.CharField(max_length=255, required=False, label="Billing address")
    billing_city = forms.CharField(max_length=100, required=False)
    billing_postal_code = forms.CharField(max_length=20, required=False)
    billing_country = forms.CharField(max_length=100, required=False)
    payment_method = forms.ChoiceField(choices=PAYMENT_METHODS)
    payment_token = forms.CharField(max_length=255)

    ADDRESS_FIELDS = ("full_name", "line1", "city", "postal_code", "country")

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("billing_same_as_shipping"):
            for name in self.ADDRESS_FIELDS:
                if not cleaned.get(f"billing_{name}"):
                    self.add_error(f"billing_{name}", "This field is required.")
        return cleaned

    def shipping_address(self):
        return {name: self.cleaned_data[name] for name in self.ADDRESS_FIELDS}

    def billing_address(self):
        if self.cleaned_data.get("billing_same_as_shipping"):
            return self.shipping_address()
        return {name: self.cleaned_data[f"billing_{name}"] for name in self.ADDRESS_FIELDS}


class OrderStatusFilterForm(forms.Form):
    status = forms.ChoiceField(choices=[("", "All")] + list(Order.Status.choices), required=False)
