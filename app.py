import logging
import os
from functools import wraps

from dotenv import load_dotenv
from flask import Flask, render_template, request, redirect, url_for, session, flash, send_file, abort, jsonify

from logic.form_steps import STEPS, MAX_TEXT_LENGTH, clean_answer, field_names
from logic.pdf_generator import generate_pdf, metric_rows
from logic.score_engine import calculate_venture, get_rating
from logic.validation import find_invalid_fields
from logic.wizard import Wizard, Step, DATA_STEPS

# ---------- App init ----------
load_dotenv()
app = Flask(__name__)
app.secret_key = os.getenv("FLASK_SECRET_KEY", "dev-secret-key")
# UTF-8 instead of \uXXXX escapes keeps non-Latin answers small in the session cookie
app.json.ensure_ascii = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
app.logger.setLevel(LOG_LEVEL)


# ---------- Helpers ----------
def get_wizard():
    return Wizard.from_dict(session.get("wizard"))


def save_wizard(wizard):
    session["wizard"] = wizard.to_dict()


def redirect_to_step(wizard):
    if wizard.step is Step.WELCOME:
        return redirect(url_for("index"))
    if wizard.step is Step.RESULTS:
        return redirect(url_for("results"))
    return redirect(url_for("step", number=wizard.step_number))


def result_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        wizard = get_wizard()
        if wizard.result is None:
            flash("Finish the questionnaire to see your results.", "warning")
            return redirect_to_step(wizard)
        return f(wizard, *args, **kwargs)
    return wrapper


# ---------- Welcome ----------
@app.route("/")
def index():
    wizard = get_wizard()
    if wizard.step is not Step.WELCOME:
        return redirect_to_step(wizard)
    return render_template("welcome.html")


@app.route("/start", methods=["POST"])
def start():
    wizard = get_wizard()
    if wizard.step is Step.WELCOME:
        wizard.advance()
        save_wizard(wizard)
    return redirect_to_step(wizard)


# ---------- Multi-step form routes ----------
@app.route("/step/<int:number>", methods=["GET", "POST"])
def step(number):
    if not 1 <= number <= len(DATA_STEPS):
        abort(404)
    wizard = get_wizard()
    if wizard.step_number != number:
        return redirect_to_step(wizard)

    step_key = wizard.step.value
    if request.method == "POST":
        wizard.set_answers({name: clean_answer(name, request.form.get(name))
                            for name in field_names(step_key)})
        if request.form.get("action") == "back":
            wizard.retreat()
        else:
            wizard.advance()
            if wizard.step is Step.RESULTS:
                app.logger.info("Questionnaire completed: score=%s", wizard.result.score)
        save_wizard(wizard)
        return redirect_to_step(wizard)

    return render_template(
        "step.html",
        step=STEPS[step_key],
        answers=wizard.answers,
        warnings=find_invalid_fields(wizard.answers),
        active_step=wizard.step_number,
        total_steps=len(DATA_STEPS),
        progress=wizard.progress_percent,
        can_go_back=wizard.can_retreat,
        is_last=wizard.is_final_data_step,
        max_text=MAX_TEXT_LENGTH,
    )


# ---------- Results ----------
@app.route("/results")
@result_required
def results(wizard):
    result = wizard.result
    return render_template(
        "result.html",
        result=result,
        rating=get_rating(result.score),
        metrics=metric_rows(result),
        answers=wizard.answers,
    )


@app.route("/results/report.pdf")
@result_required
def download_report(wizard):
    try:
        pdf = generate_pdf(wizard.answers, wizard.result)
    except Exception:
        app.logger.exception("PDF generation failed")
        flash("❌ Could not build the PDF report. Please try again.", "danger")
        return redirect(url_for("results"))
    return send_file(pdf, mimetype="application/pdf", as_attachment=True,
                     download_name="venture_report.pdf")


@app.route("/reset", methods=["POST"])
def reset():
    wizard = get_wizard()
    wizard.reset()
    save_wizard(wizard)
    return redirect(url_for("index"))


# ---------- JSON API ----------
@app.route("/api/score", methods=["POST"])
def api_score():
    answers = request.get_json(silent=True)
    if not isinstance(answers, dict):
        return jsonify({"error": "Expected a JSON object of answers."}), 400
    result = calculate_venture(answers)
    rating = get_rating(result.score)
    return jsonify({
        "result": result.to_dict(),
        "rating": {"tier": rating.tier, "label": rating.label, "emoji": rating.emoji},
        "warnings": find_invalid_fields(answers),
    })


if __name__ == '__main__':
    app.run(debug=os.getenv("FLASK_DEBUG", "0") == "1")
