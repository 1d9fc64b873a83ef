"""HTML shell for the single-page tracker UI."""

APP_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Fitness Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem auto;
             max-width: 32rem; background: #09090b; color: #fafafa; }
      input, select, textarea { padding: 0.4rem 0.6rem; width: 100%; margin-bottom: 0.6rem; }
      button { padding: 0.4rem 0.8rem; margin: 0.2rem 0.5rem 0.2rem 0; }
      button:disabled { opacity: 0.5; }
      .card { background: #18181b; border-radius: 0.75rem; padding: 1rem; margin-bottom: 1rem; }
      .bar { background: #27272a; height: 0.5rem; border-radius: 0.25rem; }
      .fill { background: #10b981; height: 100%; border-radius: 0.25rem; }
      .error { color: #f87171; }
      .muted { color: #a1a1aa; }
      li { margin-bottom: 0.4rem; }
    </style>
  </head>
  <body>
    <div id="root">Loading...</div>
    <script>
      const root = document.getElementById('root');

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body)
        });
        const data = await res.json();
        if (!res.ok) {
          throw data;
        }
        return data;
      }

      async function refresh() {
        render(await call('GET', '/state'));
      }

      function render(state) {
        if (state.view === 'ONBOARDING') return renderOnboarding(state);
        if (state.view === 'FOOD_LOG') return renderFoodLog(state);
        if (state.view === 'EXERCISE_LOG') return renderExerciseLog(state);
        return renderDashboard(state);
      }

      function renderOnboarding(state, errors) {
        const options = state.goals.map(
          (goal) => `<option value="${goal}" ${goal === 'maintain' ? 'selected' : ''}>${goal}</option>`
        ).join('');
        const err = (field) => errors && errors[field]
          ? `<div class="error">${errors[field]}</div>` : '';
        root.innerHTML = `
          <h1>FitAI Setup</h1>
          <div class="card">
            <label>Name</label><input id="name" placeholder="e.g. Alex" />${err('name')}
            <label>Weight (kg)</label><input id="weight_kg" type="number" />${err('weight_kg')}
            <label>Height (cm)</label><input id="height_cm" type="number" />${err('height_cm')}
            <label>Age</label><input id="age_years" type="number" />${err('age_years')}
            <label>Goal</label><select id="goal">${options}</select>${err('goal')}
            <button id="submit">Start tracking</button>
          </div>`;
        document.getElementById('submit').onclick = async () => {
          const value = (id) => document.getElementById(id).value;
          const number = (id) => value(id) === '' ? null : Number(value(id));
          try {
            render(await call('POST', '/onboarding', {
              name: value('name'),
              weight_kg: number('weight_kg'),
              height_cm: number('height_cm'),
              age_years: number('age_years'),
              goal: value('goal')
            }));
          } catch (error) {
            renderOnboarding(state, error.errors);
          }
        };
      }

      function renderDashboard(state) {
        const d = state.dashboard;
        const entries = d.entries.length === 0
          ? '<p class="muted">No activity recorded yet.</p>'
          : '<ul>' + d.entries.map((entry) => `
              <li>${entry.kind === 'food' ? entry.name : entry.activity}
                <span class="muted">${entry.summary}</span> <b>${entry.delta}</b></li>`
            ).join('') + '</ul>';
        const macros = d.macros.map((m) => `${m.name}: ${m.grams}g`).join(' · ');
        root.innerHTML = `
          <h2>${d.greeting}</h2>
          <div class="card">
            <div>${Math.round(d.remaining_calories)} kcal remaining of ${d.calorie_target}</div>
            <div class="bar"><div class="fill" style="width: ${d.progress * 100}%"></div></div>
            <p class="muted">Eaten ${d.stats.calories_consumed} · Burned ${d.stats.calories_burned}</p>
            <p>${d.insight}</p>
          </div>
          <div class="card">${d.has_macro_data ? macros : '<span class="muted">No macros yet.</span>'}</div>
          <button id="food">Log food</button><button id="exercise">Log exercise</button>
          <div class="card"><h3>Recent activity</h3>${entries}</div>`;
        document.getElementById('food').onclick = () => navigate('start_food_log');
        document.getElementById('exercise').onclick = () => navigate('start_exercise_log');
      }

      function renderFoodLog(state, busy) {
        const flow = state.food_log;
        root.innerHTML = `
          <button id="back" ${busy ? 'disabled' : ''}>&larr; Back</button>
          <h2>Log food</h2>
          <div class="card">
            <input id="photo" type="file" accept="image/*" capture="environment" ${busy ? 'disabled' : ''} />
            ${flow.has_image ? '<p class="muted">Photo selected.</p><button id="clear">Remove photo</button>' : ''}
            ${flow.error ? `<p class="error">${flow.error}</p>` : ''}
            ${flow.has_image && !busy ? '<button id="analyze">Analyze &amp; Log</button>' : ''}
            ${busy ? '<p class="muted">Analyzing...</p>' : ''}
          </div>`;
        document.getElementById('back').onclick = () => navigate('back');
        document.getElementById('photo').onchange = (event) => {
          const file = event.target.files[0];
          if (!file) return;
          const reader = new FileReader();
          reader.onloadend = async () => {
            render(await call('PUT', '/food/image', { image_base64: reader.result }));
          };
          reader.readAsDataURL(file);
        };
        const clear = document.getElementById('clear');
        if (clear) clear.onclick = async () => render(await call('DELETE', '/food/image'));
        const analyze = document.getElementById('analyze');
        if (analyze) analyze.onclick = async () => {
          renderFoodLog(state, true);
          try {
            render(await call('POST', '/food/analyze'));
          } catch (error) {
            await refresh();
          }
        };
      }

      function renderExerciseLog(state, busy) {
        const flow = state.exercise_log;
        const examples = state.examples.map(
          (example) => `<button class="example" ${busy ? 'disabled' : ''}>${example}</button>`
        ).join('');
        root.innerHTML = `
          <button id="back" ${busy ? 'disabled' : ''}>&larr; Back</button>
          <h2>Log exercise</h2>
          <div class="card">
            <textarea id="text" rows="4" ${busy ? 'disabled' : ''}
              placeholder="e.g. I lifted weights for 45 minutes and did 10 minutes of cardio."></textarea>
            ${flow.error ? `<p class="error">${flow.error}</p>` : ''}
            <button id="submit" ${busy || !flow.text.trim() ? 'disabled' : ''}>
              ${busy ? 'Calculating...' : 'Calculate Burn'}</button>
          </div>
          <div class="card">${examples}</div>`;
        const text = document.getElementById('text');
        text.value = flow.text;
        const submit = document.getElementById('submit');
        text.oninput = () => { submit.disabled = busy || !text.value.trim(); };
        document.getElementById('back').onclick = () => navigate('back');
        document.querySelectorAll('.example').forEach((button) => {
          button.onclick = async () => render(await call('PUT', '/exercise/text', { text: button.textContent }));
        });
        submit.onclick = async () => {
          const draft = text.value;
          renderExerciseLog({ ...state, exercise_log: { ...flow, text: draft } }, true);
          try {
            await call('PUT', '/exercise/text', { text: draft });
            render(await call('POST', '/exercise/analyze'));
          } catch (error) {
            await refresh();
          }
        };
      }

      async function navigate(action) {
        render(await call('POST', '/navigate', { action }));
      }

      refresh();
    </script>
  </body>
</html>
"""
