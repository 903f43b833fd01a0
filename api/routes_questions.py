"""
api.routes_questions - /api/questions read and bulk-delete endpoints.
"""

from flask import jsonify

from api import api_bp, get_store, page_args


@api_bp.route("/questions")
def list_questions():
    """GET /api/questions?page=1&limit=20 - newest first."""
    page, limit = page_args()
    result = get_store().list_questions(page, limit)
    return jsonify(result.to_dict("questions"))


@api_bp.route("/questions/<question_id>")
def get_question(question_id: str):
    """GET /api/questions/{id}"""
    try:
        qid = int(question_id)
    except ValueError:
        return jsonify({
            "error": "Invalid question ID",
            "message": "Question ID must be a number",
        }), 400

    question = get_store().get_question(qid)
    if question is None:
        return jsonify({
            "error": "Question not found",
            "message": f"No question found with ID {qid}",
        }), 404
    return jsonify(question.to_dict())


@api_bp.route("/questions", methods=["DELETE"])
def delete_all_questions():
    """DELETE /api/questions - remove every question and its answers."""
    deleted = get_store().delete_all_questions()
    return jsonify({
        "message": "All questions deleted successfully",
        "deletedCount": deleted,
    })
