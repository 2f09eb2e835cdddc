"""
Fee structures, fee payments and school bills.
"""

from flask import Blueprint, current_app
from flask_login import login_required

from decorators import admin_required, staff_required
from extensions import storage
from forms import BillForm, FeePaymentForm, FeeStructureForm

from .utils import deleted_or_404, get_or_404, jsonify_record, load_payload

bp = Blueprint('finance', __name__)


# Fee structures

@bp.route('/fee-structures', methods=['POST'])
@login_required
@admin_required
def create_fee_structure():
    return jsonify_record(storage.create_fee_structure(load_payload(FeeStructureForm)), 201)


@bp.route('/fee-structures/<int:fee_structure_id>')
@login_required
def get_fee_structure(fee_structure_id):
    return jsonify_record(get_or_404(storage.get_fee_structure(fee_structure_id), 'Fee structure'))


@bp.route('/fee-structures/<int:fee_structure_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_fee_structure(fee_structure_id):
    data = load_payload(FeeStructureForm, partial=True)
    return jsonify_record(get_or_404(storage.update_fee_structure(fee_structure_id, data), 'Fee structure'))


@bp.route('/fee-structures/<int:fee_structure_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_fee_structure(fee_structure_id):
    return deleted_or_404(storage.delete_fee_structure(fee_structure_id), 'Fee structure')


# Fee payments

@bp.route('/fee-payments', methods=['POST'])
@login_required
@staff_required
def create_fee_payment():
    payment = storage.create_fee_payment(load_payload(FeePaymentForm))
    current_app.logger.info(f"Recorded payment {payment.receipt_number} of {payment.amount_paid} "
                            f"from student {payment.student_id}")
    return jsonify_record(payment, 201)


@bp.route('/fee-payments/<int:payment_id>')
@login_required
def get_fee_payment(payment_id):
    return jsonify_record(get_or_404(storage.get_fee_payment(payment_id), 'Fee payment'))


@bp.route('/fee-payments/<int:payment_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_fee_payment(payment_id):
    data = load_payload(FeePaymentForm, partial=True)
    return jsonify_record(get_or_404(storage.update_fee_payment(payment_id, data), 'Fee payment'))


@bp.route('/fee-payments/<int:payment_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_fee_payment(payment_id):
    return deleted_or_404(storage.delete_fee_payment(payment_id), 'Fee payment')


# Bills

@bp.route('/bills', methods=['POST'])
@login_required
@admin_required
def create_bill():
    return jsonify_record(storage.create_bill(load_payload(BillForm)), 201)


@bp.route('/bills/<int:bill_id>')
@login_required
@admin_required
def get_bill(bill_id):
    return jsonify_record(get_or_404(storage.get_bill(bill_id), 'Bill'))


@bp.route('/bills/<int:bill_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_bill(bill_id):
    data = load_payload(BillForm, partial=True)
    return jsonify_record(get_or_404(storage.update_bill(bill_id, data), 'Bill'))


@bp.route('/bills/<int:bill_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_bill(bill_id):
    return deleted_or_404(storage.delete_bill(bill_id), 'Bill')
